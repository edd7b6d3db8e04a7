"""Example runner that wires together the gribweather modules."""

from __future__ import annotations

from pathlib import Path

from gribweather.service import GribService


def run_example() -> None:
    """
    Download the Oslofjord wind file and print a summary of each parameter.
    """

    service = GribService(work_dir=Path("data/example"))
    try:
        for result in service.get_wind_data("oslofjord"):
            print(
                f"{result.parameter.value}: {len(result.samples)} points, "
                f"range {result.min_value:.2f}..{result.max_value:.2f}"
            )
            print(result.to_dataframe().head())
    finally:
        service.close()


if __name__ == "__main__":
    run_example()
