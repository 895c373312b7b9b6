"""
uBAM Sampler Component

An ops-based component that samples a uBAM file down to a target base count.
"""

import posixpath
import urllib.parse
from pathlib import Path
from typing import Any, Dict

import dagster
from dagster import OpExecutionContext, Out, op

from .quantity import parse_base_count
from .sample_ubam import run_sampling


def default_output_name(input_url: str) -> str:
    """File name of the sampled copy, taken from the last segment of the URL."""
    name = posixpath.basename(urllib.parse.urlparse(input_url).path)
    return name or "sampled.bam"


class UbamSampler(dagster.Model, dagster.Resolvable):
    """
    Component for sampling uBAM files from URLs.

    The op streams the input once, writes records to a local file until the
    target base count is met and returns the run summary.
    """

    name: str = "sample_ubam"
    output_directory: str = "sampled"  # Directory for sampled outputs
    target_bases: str = "1Gb"  # Default target, e.g. "5000", "10Mb", "1Gb"

    def build_defs(self, context):
        @op(
            name=self.name,
            config_schema={
                "input_url": str,
                "output_path": dagster.Field(str, is_required=False),
                "target_bases": dagster.Field(str, is_required=False),
            },
            out=Out(Dict[str, Any]),
            description="Samples a uBAM file from a URL down to a target base count",
        )
        def sample_ubam_op(context: OpExecutionContext) -> Dict[str, Any]:
            input_url = context.op_config["input_url"]
            target_bases = parse_base_count(
                context.op_config.get("target_bases", self.target_bases)
            )
            output_path = context.op_config.get("output_path")
            if output_path is None:
                output_dir = Path(self.output_directory)
                output_dir.mkdir(parents=True, exist_ok=True)
                output_path = str(output_dir / default_output_name(input_url))

            context.log.info(
                f"🎯 Sampling {target_bases:,} bases from {input_url} → {output_path}"
            )

            result = run_sampling(
                input_url, output_path, target_bases, emit=context.log.info
            )

            if result.completed:
                context.log.info(
                    f"✅ Sampled {result.records_written:,} records in {result.elapsed_seconds:.2f} seconds"
                )
            else:
                context.log.error(f"❌ Sampling stopped early: {result.error}")

            return result.to_dict()

        return sample_ubam_op
