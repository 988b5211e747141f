#!/usr/bin/env python3
"""Command line entry point which fits a cluster of hits from a CSV file."""

import argparse
import sys
from typing import List, Optional

import numpy as np

from slidefit.data import Cluster
from slidefit.fit.factories import fitter_factory
from slidefit.utils.config import apply_overrides, load_config
from slidefit.utils.logger import logger
from slidefit.version import __version__

# Columns of the per-layer output table
LAYER_TABLE_HEADER = "layer,l,fit_t,gradient,rms"


def main(
    config: str,
    source: str,
    output: Optional[str] = None,
    config_overrides: Optional[List[str]] = None,
):
    """Main driver which fits one cluster.

    Performs these basic functions:
    - Update the configuration with the command-line overrides
    - Read the hits and fit them with the configured fitter
    - Log a summary of the fit and store the per-layer fit table

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : str
        Path to the CSV file of hits (`x`, `z` and optionally `y`, `energy`)
    output : str, optional
        Path to the output CSV file of per-layer fits
    config_overrides : List[str], optional
        List of config overrides in the form "key.path=value"

    Returns
    -------
    SlidingFitResult
        Sliding fit of the cluster
    """
    # Load the configuration file, apply the overrides
    cfg = load_config(config)
    if config_overrides:
        cfg = apply_overrides(cfg, config_overrides)

    base_cfg = cfg.get("base") or {}
    logger.setLevel(str(base_cfg.get("verbosity", "info")).upper())

    # The configuration must minimally contain a fit block
    if "fit" not in cfg:
        raise KeyError("Configuration file must contain a `fit` block.")

    fitter = fitter_factory(cfg["fit"])
    cluster = read_hits(source)
    logger.info(f"Fitting {len(cluster)} hits from {source} with {fitter}")

    fit = fitter.fit(cluster)
    log_summary(fit, cfg.get("shape") or {})

    if output is not None:
        write_layers(fit, output)
        logger.info(f"Wrote {len(fit)} layer fits to {output}")

    return fit


def read_hits(source):
    """Reads a cluster of hits from a CSV file with a header row.

    Parameters
    ----------
    source : str
        Path to the CSV file. It must contain `x` and `z` columns and may
        contain `y` and `energy` columns.

    Returns
    -------
    Cluster
        Cluster of hits
    """
    table = np.genfromtxt(source, delimiter=",", names=True, ndmin=1)
    names = table.dtype.names or ()
    for key in ("x", "z"):
        if key not in names:
            raise KeyError(f"The hit file {source} must contain a `{key}` column.")

    points = np.zeros((len(table), 3), dtype=np.float64)
    points[:, 0], points[:, 2] = table["x"], table["z"]
    if "y" in names:
        points[:, 1] = table["y"]

    depositions = None
    if "energy" in names:
        depositions = np.asarray(table["energy"], dtype=np.float32)

    return Cluster(points=points, depositions=depositions)


def log_summary(fit, shape_cfg):
    """Logs the main features of a sliding fit.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    shape_cfg : dict
        Parameters of the shape diagnostics, with optional `scatter`,
        `multivalued` and `width` blocks
    """
    logger.info(
        f"Fitted {len(fit)} layers in [{fit.min_layer}, {fit.max_layer}], "
        f"half window {fit.half_window}, pitch {fit.pitch}"
    )
    logger.info(f"  - Min layer position: {fit.min_layer_position()}")
    logger.info(f"  - Max layer position: {fit.max_layer_position()}")
    logger.info(f"  - Track width: {fit.track_width(**shape_cfg.get('width', {})):.4f}")
    logger.info(
        "  - Multivalued in x: "
        f"{fit.is_multivalued_in_x(**shape_cfg.get('multivalued', {}))}"
    )
    logger.info(
        f"  - Largest scatter: {fit.largest_scatter(**shape_cfg.get('scatter', {}))}"
    )


def write_layers(fit, output):
    """Writes the per-layer fit table to a CSV file.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    output : str
        Path to the output CSV file
    """
    table = np.column_stack(
        [fit.layers, fit.layer_l, fit.layer_fit_t, fit.layer_gradients, fit.layer_rms]
    )
    np.savetxt(
        output,
        table,
        delimiter=",",
        header=LAYER_TABLE_HEADER,
        comments="",
        fmt=["%d", "%.6f", "%.6f", "%.6f", "%.6f"],
    )


def cli():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="slidefit - Sliding linear fits of 2D clusters of hits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slidefit -c fit.yaml -s hits.csv                       Fit and log a summary
  slidefit -c fit.yaml -s hits.csv -o layers.csv         Also store the layer fits
  slidefit -c fit.yaml -s hits.csv --set fit.half_window=10
""",
    )

    # Add a version command
    parser.add_argument(
        "--version", "-v", action="version", version=f"slidefit {__version__}"
    )

    # Add config file argument
    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    # Add source and output arguments
    parser.add_argument(
        "-s", "--source", required=True, help="Path to the CSV file of hits"
    )
    parser.add_argument("-o", "--output", help="Path to the output layer table")

    # Add option to dynamically override any config parameter using dot notation
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set fit.half_window=10). "
        "Can be used multiple times for multiple overrides.",
    )

    # Parse the arguments
    if len(sys.argv) == 1:
        parser.print_help()
        return

    args = parser.parse_args()

    main(
        config=args.config,
        source=args.source,
        output=args.output,
        config_overrides=args.config_overrides,
    )


if __name__ == "__main__":
    cli()
