import math

import pytest

from towerfreq.config import AllocationConfig


class TestAllocationConfig:
    def test_default_config_valid(self):
        config = AllocationConfig()
        assert config.interference_radius_km == 0.5
        assert config.palette == (110, 111, 112, 113, 114, 115)

    def test_palette_list_stored_as_tuple(self):
        config = AllocationConfig(palette=[3, 1, 2])
        assert config.palette == (3, 1, 2)

    def test_radius_in_metres(self):
        assert AllocationConfig(interference_radius_km=0.5).interference_radius_m == 500.0

    def test_zero_radius(self):
        with pytest.raises(ValueError, match="interference_radius_km must be positive"):
            AllocationConfig(interference_radius_km=0.0)

    def test_negative_radius(self):
        with pytest.raises(ValueError, match="interference_radius_km must be positive"):
            AllocationConfig(interference_radius_km=-1.0)

    def test_nan_radius(self):
        with pytest.raises(ValueError, match="interference_radius_km must be positive"):
            AllocationConfig(interference_radius_km=math.nan)

    def test_empty_palette(self):
        with pytest.raises(ValueError, match="palette must contain at least one channel"):
            AllocationConfig(palette=())

    def test_non_positive_channel(self):
        with pytest.raises(ValueError, match="palette channels must be positive"):
            AllocationConfig(palette=(1, 0))

    def test_non_integer_channel(self):
        with pytest.raises(ValueError, match="palette channels must be integers"):
            AllocationConfig(palette=(1, 2.5))

    def test_duplicate_channels(self):
        with pytest.raises(ValueError, match="palette channels must be distinct"):
            AllocationConfig(palette=(1, 2, 1))
