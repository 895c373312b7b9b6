"""
Command line entry point: ``sample-ubam <input_url> <output_path> <target>``.
"""

import logging
import sys

from .components.quantity import parse_base_count
from .components.sample_ubam import run_sampling

USAGE = "Usage: sample-ubam <input_ubam_url> <output_ubam_path> <target_base_count>"


def main(argv=None):
    """Run a sampling job, returning the process exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print(USAGE)
        return 1

    input_url, output_path, target = args
    target_bases = parse_base_count(target)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    run_sampling(input_url, output_path, target_bases)
    return 0


if __name__ == "__main__":
    sys.exit(main())
