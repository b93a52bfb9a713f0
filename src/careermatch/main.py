"""CareerMatch entry point."""

import asyncio
import logging

from .cli import run_cli


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_cli())


if __name__ == "__main__":
    main()
