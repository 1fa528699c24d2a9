import os
from pathlib import Path

import pytest

from shaderpack.pack import DimensionId, ShaderPack

SHADERPACK_PATH = os.environ.get("SHADERPACK_PATH") or ""


@pytest.mark.skipif(
    not SHADERPACK_PATH or not Path(SHADERPACK_PATH).is_dir(),
    reason="SHADERPACK_PATH not set to a shader directory",
)
def test_real_pack_loads(tmp_path: Path):
    pack = ShaderPack(SHADERPACK_PATH, config_dir=tmp_path)
    base = pack.get_program_set(DimensionId.BASE)
    assert len(base) > 0, "no programs found"
    for dimension in DimensionId:
        programs = pack.get_program_set(dimension)
        assert set(base) <= set(programs)
    print(f"✓ {pack.pack_name}: {list(base)}")
