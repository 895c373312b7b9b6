"""
Base-count limited sampling of SAM/BAM/uBAM files.

This module streams records from a URL (or local path) and copies them to a
local SAM or BAM file until a target number of bases has been written.
Network access and the container format are handled by pysam/htslib.
"""

import contextlib
import logging
import time
import urllib.parse
from typing import Callable, Iterable, Iterator, Optional, Tuple

import pysam

from .progress import ProgressReporter
from .types import SamplingResult

logger = logging.getLogger(__name__)

# Schemes htslib opens itself as sequential streams
REMOTE_SCHEMES = ("http", "https", "ftp", "s3", "s3+http", "s3+https", "gs")


def resolve_input_url(input_url: str) -> str:
    """Turn an input URL into a filename htslib can open."""
    parsed_url = urllib.parse.urlparse(input_url)
    if parsed_url.scheme in REMOTE_SCHEMES:
        return input_url
    if parsed_url.scheme == "file":
        return urllib.parse.unquote(parsed_url.path)
    return input_url


def output_mode_for(output_path: str) -> str:
    """BAM for a ``.bam`` extension, SAM text for anything else."""
    return "wb" if output_path.lower().endswith(".bam") else "w"


@contextlib.contextmanager
def open_sampling_files(
    input_url: str, output_path: str
) -> Iterator[Tuple[pysam.AlignmentFile, pysam.AlignmentFile]]:
    """
    Open the input reader and the output writer, closing both on exit.

    The reader is lenient: unaligned files without @SQ lines are accepted and
    a missing EOF marker does not abort the read. The writer is initialised
    with the reader's header.
    """
    with contextlib.ExitStack() as stack:
        reader = stack.enter_context(
            pysam.AlignmentFile(
                resolve_input_url(input_url),
                "r",
                check_sq=False,
                ignore_truncation=True,
            )
        )
        logger.debug(f"Opened input: {input_url}")

        writer = stack.enter_context(
            pysam.AlignmentFile(
                output_path, output_mode_for(output_path), header=reader.header
            )
        )
        logger.debug(f"Opened output: {output_path}")

        yield reader, writer


class SamplingLoop:
    """
    Copies records from a source to a sink until the target base count is met.

    The target is checked before each record is pulled, and a pulled record is
    always written whole, so the final total may overshoot the target by up
    to one record.
    """

    def __init__(
        self,
        source: Iterable[pysam.AlignedSegment],
        sink,
        target_bases: int,
        reporter: Optional[ProgressReporter] = None,
    ):
        self.source = source
        self.sink = sink
        self.target_bases = target_bases
        self.reporter = reporter
        self.total_bases = 0
        self.records_written = 0

    def run(self) -> int:
        records = iter(self.source)

        while self.total_bases < self.target_bases:
            record = next(records, None)
            if record is None:
                break

            self.sink.write(record)
            self.total_bases += record.query_length
            self.records_written += 1

            if self.reporter is not None:
                self.reporter.update(self.total_bases)

        return self.total_bases


def run_sampling(
    input_url: str,
    output_path: str,
    target_bases: int,
    emit: Callable[[str], None] = print,
) -> SamplingResult:
    """
    Sample records from ``input_url`` into ``output_path``.

    Errors raised while opening or streaming are logged and recorded on the
    result; whatever was written before the failure is kept and reported.
    """
    result = SamplingResult(
        input_url=input_url, output_path=output_path, target_bases=target_bases
    )
    loop = None
    start_time = time.time()

    try:
        with open_sampling_files(input_url, output_path) as (reader, writer):
            reporter = ProgressReporter(target_bases, emit=emit)
            # until_eof reads SAM text without @SQ lines, plain iteration does not
            loop = SamplingLoop(
                reader.fetch(until_eof=True), writer, target_bases, reporter
            )
            loop.run()
    except Exception as e:
        logger.error(f"An error occurred: {e}", exc_info=True)
        result.error = str(e) or type(e).__name__

    if loop is not None:
        result.total_bases = loop.total_bases
        result.records_written = loop.records_written
    result.elapsed_seconds = time.time() - start_time

    emit(f"Sampling complete. Total sampled bases: {result.total_bases}.")
    return result
