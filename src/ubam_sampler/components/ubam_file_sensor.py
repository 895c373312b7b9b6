"""
uBAM File Sensor Component

A sensor component that triggers sampling jobs for configured uBAM URLs.
"""

import json

import dagster
from dagster import RunRequest, sensor


def build_run_config(op_name: str, input_url: str) -> dict:
    """Run config that points the sampling op at a single input URL."""
    return {"ops": {op_name: {"config": {"input_url": input_url}}}}


class UbamFileSensor(dagster.Model, dagster.Resolvable):
    """
    Sensor component for triggering uBAM sampling jobs.

    Yields one run request per configured URL that has not been sampled yet.
    """

    name: str = "ubam_file_sensor"
    input_urls: list[str] = []
    job_name: str = "sample_ubam_job"
    op_name: str = "sample_ubam"
    minimum_interval_seconds: int = 30

    def build_defs(self, context):
        @sensor(
            name=self.name,
            job_name=self.job_name,
            minimum_interval_seconds=self.minimum_interval_seconds,
        )
        def ubam_file_sensor_fn(context):
            """
            Sensor that triggers sampling runs for configured uBAM URLs.

            Processed URLs are kept in the cursor so each URL is sampled once.
            """
            if not self.input_urls:
                context.log.info("No uBAM URLs configured for sensor")
                return

            processed_urls = set(json.loads(context.cursor)) if context.cursor else set()
            new_urls = [url for url in self.input_urls if url not in processed_urls]

            if not new_urls:
                context.log.info("No new uBAM URLs to sample")
                return

            context.log.info(f"Triggering sampling for {len(new_urls)} uBAM URLs")

            for input_url in new_urls:
                yield RunRequest(
                    run_key=input_url,
                    run_config=build_run_config(self.op_name, input_url),
                    tags={
                        "input_url": input_url,
                        "job_type": "sample_ubam",
                    },
                )
                processed_urls.add(input_url)

            context.update_cursor(json.dumps(sorted(processed_urls)))

        return ubam_file_sensor_fn
