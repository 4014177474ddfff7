"""Allow ``python -m ai_codereview``."""

from .cli import main

if __name__ == "__main__":
    main()
