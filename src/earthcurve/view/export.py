"""
Static export of the diagram (SVG, PNG, PDF) through matplotlib.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional
import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from earthcurve.controller.diagram import DiagramController
from earthcurve.model.earth import CurvedEarthParams

logger = logging.getLogger(__name__)


def export_diagram(controller: DiagramController, filepath: str, title: Optional[str] = None) -> str:
    """
    Render the current diagram to ``filepath``; the format follows the extension.

    Args:
        controller: Source of the geometry, drawn with its current view transform.
        filepath: Output file, e.g. "diagram.svg".
        title: Plot title. Defaults to the hypothesis and a timestamp.

    Returns:
        The path written.
    """
    params = controller.earth_params()
    if title is None:
        hypothesis = params.curvature_type.value if isinstance(params, CurvedEarthParams) else "flat"
        title = f"{hypothesis} Earth, control={controller.control:g} ({datetime.now().strftime('%d.%m.%Y %H:%M:%S')})"

    fig, ax = plt.subplots(figsize=(6, 6), constrained_layout=True)
    try:
        outline = controller.earth_outline()
        ax.plot(outline[:, 0], outline[:, 1], color="#2a6f97", lw=2, label="surface")

        for i, (start, end) in enumerate(controller.observation_rays()):
            ax.plot([start.x, end.x], [start.y, end.y], color="#f4a259", lw=1,
                    label="sun rays" if i == 0 else None)

        handles = [controller.handle_position(name) for name in controller.endpoint_names]
        ax.plot([h.x for h in handles], [h.y for h in handles], color="#6c757d", lw=1, marker="o",
                markerfacecolor="#e63946", markeredgecolor="#e63946", label="ruler")

        ax.set_aspect("equal")
        ax.grid(visible=True, which="major", linestyle="-", color="gray", lw=0.5)
        ax.set_title(title)
        ax.legend(loc="best")
        fig.savefig(filepath)
    finally:
        plt.close(fig)

    logger.info(f"Diagram exported to: {filepath}")
    return filepath
