import logging
import os
import sys
from typing import Sequence

from ava_init.errors import AvaInitError
from ava_init.tasks import init

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging with the specified level."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run ava-init with every token forwarded to the test script.

    Tokens are not parsed as options: ``ava-init --verbose`` writes
    ``ava --verbose``. Only ``--init`` and ``--unicorn`` are consumed.

    Returns:
        Process exit status
    """
    setup_logging(os.getenv("AVA_INIT_LOG_LEVEL", "INFO"))
    tokens = list(argv) if argv is not None else sys.argv[1:]
    try:
        init(args=tokens)
    except AvaInitError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
