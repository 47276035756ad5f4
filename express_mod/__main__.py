"""Allow ``python -m express_mod``."""

from express_mod.cli import main

if __name__ == "__main__":
    main()
