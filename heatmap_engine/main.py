import argparse
import json
import logging
import sys

from heatmap_engine import constants
from heatmap_engine.configuration import HeatmapConfiguration
from heatmap_engine.engine import HeatmapEngine
from heatmap_engine.logging import create_rotating_log
from heatmap_engine.sample_source import read_trace, replay


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Replay a recorded accelerometer trace and print the heat map report."
    )
    parser.add_argument("trace", help="CSV file with timestamp,x,y,z columns")
    parser.add_argument("--output", help="write the report JSON here instead of stdout")
    parser.add_argument(
        "--config",
        default=constants.CONFIG_FILE_NAME,
        help="JSON configuration file (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG)
    logger = create_rotating_log(constants.LOG_NAME)
    logger.debug("--- Starting heat map replay of {0}".format(args.trace))

    try:
        configuration = HeatmapConfiguration.get_engine_configuration(
            args.config, logger
        )
        engine = HeatmapEngine(configuration)
        recorded = replay(engine, read_trace(args.trace))
        report = json.dumps(engine.snapshot(), indent=2)
        if args.output:
            with open(args.output, "w") as output_file:
                output_file.write(report)
        else:
            print(report)
        logger.info(
            "Recorded {0} points, dropped {1}".format(
                recorded, sum(engine.dropped_samples().values())
            )
        )
    except Exception as e:
        logger.exception("Exception: " + str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
