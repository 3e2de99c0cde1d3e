"""Wait for a file to appear, cancelling from another thread on demand"""

import logging
import sys
from pathlib import Path

from waitfor import CancelToken, wait_for, with_backoff, with_cancel, with_description, with_limit, with_reports

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main(path: str) -> None:
    target = Path(path)
    token = CancelToken.with_timeout(600)
    wait_for(
        lambda: (target.exists(), None),
        with_limit(300),
        with_backoff(1.1),
        with_reports(5),
        with_description(f"{target} to exist"),
        with_cancel(token),
    )
    print(f"{target} is there")


if __name__ == "__main__":
    main(sys.argv[1])
