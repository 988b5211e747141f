"""slidefit command line interface.

**Primary CLI**:
    cli.py : Fits a cluster of hits read from a CSV file, logs a summary of
             the fit and optionally writes the per-layer fit table

Usage Examples
--------------
Main CLI usage::

    slidefit -c config/fit.yaml -s hits.csv
    slidefit -c config/fit.yaml -s hits.csv -o layers.csv --set fit.half_window=10
"""
