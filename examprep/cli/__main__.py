"""Allow running as: python -m examprep.cli"""

from examprep.cli.main import main

if __name__ == "__main__":
    main()
