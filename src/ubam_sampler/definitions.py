import logging

# Configure logging to reduce verbosity - set at the very beginning
logging.basicConfig(level=logging.ERROR, force=True)
logging.getLogger().setLevel(logging.ERROR)
logging.getLogger("dagster").setLevel(logging.ERROR)
logging.getLogger("dagster._core").setLevel(logging.ERROR)

from dagster import definitions, Definitions, job
from dagster.components.core.component_tree import ComponentTree

from .components.ubam_sampler import UbamSampler
from .components.ubam_file_sensor import UbamFileSensor

SAMPLE_UBAM_URLS = [
    "https://s3.amazonaws.com/1000genomes/phase3/data/HG00096/alignment/HG00096.unmapped.ILLUMINA.bwa.GBR.low_coverage.20120522.bam"
]


@definitions
def defs():
    context = ComponentTree.for_test().load_context

    sampler = UbamSampler(target_bases="100Mb")
    sensor = UbamFileSensor(
        name="ubam_file_sensor",
        input_urls=SAMPLE_UBAM_URLS,
        job_name="sample_ubam_job",
        op_name=sampler.name,
    )

    sample_op = sampler.build_defs(context)
    sensor_def = sensor.build_defs(context)

    @job(name="sample_ubam_job")
    def sample_ubam_job():
        """Job that samples one uBAM file per run."""
        sample_op()

    return Definitions(sensors=[sensor_def], jobs=[sample_ubam_job])
