import importlib.util
from pathlib import Path

import pytest

pytest.importorskip("PIL")  # tools extra

from beerrun.levelgen.assembler import generate
from beerrun.render import strip
from beerrun.render.palette import GROUND

TOOL = Path(__file__).resolve().parents[1] / "tools" / "render_level.py"

def load_tool():
    spec = importlib.util.spec_from_file_location("render_level_tool", TOOL)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod

def test_png_uses_strip_geometry():
    tool = load_tool()
    assert (tool.GROUND_ROWS, tool.ENEMY_HEIGHT, tool.OBSTACLE_HEIGHT) == \
        (strip.GROUND_ROWS, strip.ENEMY_HEIGHT, strip.OBSTACLE_HEIGHT)
    lv = generate(2, seed=3)
    view = strip.StripView(scale=4, height=48)
    img = tool.render_level(lv, scale=4, height=48)
    assert img.size == strip.surface_size(lv, view)
    # bottom row under the spawn segment is plain ground in both previews
    assert img.getpixel((4, view.height - 1)) == GROUND
