"""Tools to draw a sliding fit on top of its hits."""

from .point import scatter_points

__all__ = ["draw_sliding_fit"]


def draw_sliding_fit(
    fit,
    draw_hits=True,
    draw_scatter=False,
    hit_color="lightgray",
    fit_color="crimson",
    scatter_color="black",
    dim=2,
    **kwargs,
):
    """Draws the fitted trajectory of a sliding fit.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    draw_hits : bool, default True
        If `True`, draw the hits of the cluster (requires a fitted cluster)
    draw_scatter : bool, default False
        If `True`, draw the position of the largest scatter, if any
    hit_color : str, default 'lightgray'
        Color of the hits
    fit_color : str, default 'crimson'
        Color of the fitted trajectory
    scatter_color : str, default 'black'
        Color of the largest scatter marker
    dim : int, default 2
        Dimension (can either be 2 or 3)
    **kwargs : dict, optional
        Additional arguments passed to :func:`find_largest_scatter` for the
        largest scatter search

    Returns
    -------
    List[Union[go.Scatter, go.Scatter3d]]
        List of traces
    """
    traces = []
    if draw_hits and fit.cluster is not None and len(fit.cluster):
        traces += scatter_points(
            fit.cluster.points, color=hit_color, dim=dim, name="Hits"
        )

    traces += scatter_points(
        fit.layer_positions,
        color=fit_color,
        dim=dim,
        mode="lines+markers",
        markersize=3,
        hovertext=[f"Layer: {l}" for l in fit.layers.tolist()],
        name="Sliding fit",
    )

    if draw_scatter:
        position = fit.largest_scatter(**kwargs)
        if position is not None:
            traces += scatter_points(
                position[None, :],
                color=scatter_color,
                dim=dim,
                markersize=8,
                name="Largest scatter",
            )

    return traces
