import os
import random
from pathlib import Path

import numpy as np
import pytest

from tracklet_transform.calibration import CalibrationService
from tracklet_transform.core.config import (
    CalibrationConfig,
    ChamberConfig,
    GeometryConfig,
    PadPlaneConfig,
    RunConfig,
    TransformerConfig,
)
from tracklet_transform.geometry import GeometryService
from tracklet_transform.transformer import TrackletTransformer

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

PAD_WIDTHS = (0.635, 0.665, 0.695, 0.725, 0.755, 0.785)


@pytest.fixture(autouse=True)
def seed_rng() -> None:
    random.seed(0)
    np.random.seed(0)
    os.environ["PYTHONHASHSEED"] = "0"


@pytest.fixture()
def examples_dir() -> Path:
    return EXAMPLES_DIR


@pytest.fixture()
def run_config() -> RunConfig:
    pad_planes = [
        PadPlaneConfig(layer=layer, stack=stack, width_ipad=width, nrows=16, row_size=9.0)
        for layer, width in enumerate(PAD_WIDTHS)
        for stack in (0, 1)
    ]
    pad_planes.append(
        PadPlaneConfig(layer=0, stack=2, width_ipad=0.635, row_sizes=[7.0] + [7.5] * 10 + [8.0])
    )
    chambers = [
        ChamberConfig(detector=layer, translation=(300.0 + 12.5 * layer, 0.0, 250.0))
        for layer in range(6)
    ]
    chambers.append(
        ChamberConfig(detector=30, rotation_deg=(20.0, 5.0, -3.0), translation=(300.0, 1.0, 250.0))
    )
    chambers.append(ChamberConfig(detector=12, translation=(300.0, 0.0, 0.0)))
    return RunConfig(
        geometry=GeometryConfig(pad_planes=pad_planes, chambers=chambers),
        calibration=CalibrationConfig(
            vdrift_default=1.546,
            exb_default=-0.16,
            vdrift={3: 1.6},
            exb={3: 0.1},
            t0={435: 0.05},
        ),
        transformer=TransformerConfig(),
    )


@pytest.fixture()
def geometry(run_config: RunConfig) -> GeometryService:
    return GeometryService(run_config.geometry)


@pytest.fixture()
def calibration(run_config: RunConfig) -> CalibrationService:
    return CalibrationService(run_config.calibration)


@pytest.fixture()
def transformer(geometry: GeometryService, calibration: CalibrationService) -> TrackletTransformer:
    t = TrackletTransformer(geometry, calibration, TransformerConfig(decoding="direct"))
    t.init()
    return t


@pytest.fixture()
def xor_transformer(
    geometry: GeometryService, calibration: CalibrationService
) -> TrackletTransformer:
    t = TrackletTransformer(geometry, calibration, TransformerConfig(decoding="xor"))
    t.init()
    return t
