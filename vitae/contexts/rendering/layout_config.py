"""
Layout configuration for the printable CV.

Page geometry, font size, colors and section titles live in cv_layout.yaml
(shipped next to this module). A different file can be selected with the
CV_LAYOUT_PATH environment variable, and individual values can be overridden
per call:

    >>> layout = load_layout(overrides={"page": {"margin": "15mm"}})
    >>> layout["page"]["margin"]
    '15mm'
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_LAYOUT_PATH = Path(__file__).parent / "cv_layout.yaml"
CV_LAYOUT_PATH = Path(os.getenv("CV_LAYOUT_PATH") or DEFAULT_LAYOUT_PATH)


def load_layout(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Load the layout config, optionally merging overrides on top.

    Args:
        config_path: Layout YAML (defaults to CV_LAYOUT_PATH)
        overrides: Nested dict merged over the file (later wins)

    Returns:
        Plain dict with page, font, colors, spacing and section_titles
    """
    layout = OmegaConf.load(config_path or CV_LAYOUT_PATH)
    if overrides:
        layout = OmegaConf.merge(layout, OmegaConf.create(overrides))
    return OmegaConf.to_container(layout, resolve=True)
