"""Tools to draw a set of hits or fitted positions."""

import numpy as np
import plotly.graph_objs as go

from slidefit.utils.globals import COORD_COLS, VIEW_COLS

__all__ = ["scatter_points"]


def scatter_points(
    points,
    color=None,
    markersize=2,
    linewidth=2,
    colorscale=None,
    opacity=None,
    hovertext=None,
    dim=2,
    mode="markers",
    **kwargs,
):
    """Scatters points in the (x, z) view or in 3D.

    Produces :class:`plotly.graph_objs.Scatter` (2D) or
    :class:`plotly.graph_objs.Scatter3d` (3D) trace objects. In 2D, the
    horizontal axis is the wire coordinate (z) and the vertical axis the drift
    coordinate (x). Points can be drawn individually (default `mode`) or
    joined by lines (`mode='lines'`).

    Parameters
    ----------
    points : np.ndarray
        (N, 3) array of N points of (x, y, z) coordinates
    color : Union[str, np.ndarray], optional
        Color of markers/lines or (N) list of color of markers
    markersize : float, default 2
        Marker size
    linewidth : float, default 2
        Line width
    colorscale : Union[str, List[str]], optional
        Plotly colorscale specifier for the markers
    opacity : float, optional
        Marker opacity
    hovertext : Union[List[str], List[int]], optional
        (N) List of labels associated with each marker
    dim : int, default 2
        Dimension (can either be 2 or 3)
    mode : str, default 'markers'
        Drawing mode
    **kwargs : dict, optional
        List of additional arguments to pass to the plotly trace

    Returns
    -------
    List[Union[go.Scatter, go.Scatter3d]]
        (1) List with one graph of the input points
    """
    # Check the dimension for compatibility
    if dim not in [2, 3]:
        raise ValueError("This function only supports dimension 2 or 3.")
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)

    # If there is no hovertext, print the color as part of the hovertext
    if hovertext is None and color is not None and not isinstance(color, str):
        hovertext = [f"Value: {c}" for c in color]

    # Initialize the marker/line object depending on mode
    marker, line = None, None
    if "markers" in mode:
        marker = {
            "size": markersize,
            "color": color,
            "opacity": opacity,
            "colorscale": colorscale,
        }
    if "lines" in mode:
        line = {"width": linewidth, "color": color if isinstance(color, str) else None}

    # Initialize and return
    if dim == 2:
        z, x = points[:, VIEW_COLS[1]], points[:, VIEW_COLS[0]]
        return [
            go.Scatter(
                x=z,
                y=x,
                mode=mode,
                marker=marker,
                line=line,
                text=hovertext,
                hovertemplate="z: %{x}<br>x: %{y}",
                **kwargs,
            )
        ]

    x, y, z = (points[:, c] for c in COORD_COLS)
    return [
        go.Scatter3d(
            x=x,
            y=y,
            z=z,
            mode=mode,
            marker=marker,
            line=line,
            text=hovertext,
            hovertemplate="x: %{x}<br>y: %{y}<br>z: %{z}",
            **kwargs,
        )
    ]
