"""Module and console entrypoint.

- Development: python -m rackpower
- Installed:   rackpower
"""

from infra.crash_handler import install_global_exception_handlers
from main import main


def __main__() -> None:
    install_global_exception_handlers()
    raise SystemExit(main())


if __name__ == "__main__":
    __main__()
