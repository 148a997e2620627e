"""Entry point for `python -m docprint_service`."""

from .app import main

if __name__ == '__main__':
    main()
