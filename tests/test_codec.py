"""Tests for the wire codec."""

import pytest

from floodlight.devices.codec import (
    DeviceIdentity,
    FloodlightState,
    state_to_wire,
    wire_to_changes,
    wire_to_identity,
    wire_to_state,
)
from floodlight.devices.errors import DecodeError, ValidationError


class TestStateEncoding:
    """Tests for state_to_wire / wire_to_state."""

    def test_on_encodes_as_one(self):
        assert state_to_wire(FloodlightState(on=True, brightness=40)) == {
            "Light": 1,
            "Light Intensity": 40,
        }

    def test_off_encodes_as_zero(self):
        assert state_to_wire(FloodlightState(on=False, brightness=0))["Light"] == 0

    @pytest.mark.parametrize(
        "state",
        [FloodlightState(True, 0), FloodlightState(False, 100), FloodlightState(True, 55)],
    )
    def test_round_trip(self, state):
        assert wire_to_state(state_to_wire(state)) == state

    def test_brightness_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            state_to_wire(FloodlightState(on=True, brightness=101))

    def test_unknown_fields_ignored(self):
        attrs = {"Light": 1, "Light Intensity": 30, "Siren": 1, "Mic Volume": 80}
        assert wire_to_state(attrs) == FloodlightState(on=True, brightness=30)


class TestPartialDecoding:
    """Tests for partial echoes."""

    def test_light_only_decodes_on(self):
        assert wire_to_changes({"Light": 1}) == {"on": True}

    def test_light_only_leaves_brightness_to_caller(self):
        """A full decode of a Light-only echo reads brightness as zero."""
        state = wire_to_state({"Light": 0})
        assert state.on is False
        assert state.brightness == 0

    def test_intensity_only(self):
        assert wire_to_changes({"Light Intensity": 75}) == {"brightness": 75}

    def test_light_values_other_than_one_are_off(self):
        assert wire_to_changes({"Light": 2}) == {"on": False}

    def test_non_object_raises_decode_error(self):
        with pytest.raises(DecodeError):
            wire_to_state([1, 2, 3])

    def test_non_numeric_intensity_raises_decode_error(self):
        with pytest.raises(DecodeError):
            wire_to_changes({"Light Intensity": "bright"})

    @pytest.mark.parametrize("intensity", [-1, 101, 150])
    def test_out_of_range_intensity_raises_decode_error(self, intensity):
        with pytest.raises(DecodeError, match="out of range"):
            wire_to_state({"Light": 1, "Light Intensity": intensity})

    def test_boundary_intensities_decode(self):
        assert wire_to_changes({"Light Intensity": 0}) == {"brightness": 0}
        assert wire_to_changes({"Light Intensity": 100}) == {"brightness": 100}


class TestIdentityDecoding:
    def test_projects_identity_fields(self):
        info = {"Manufacturer": "Acme", "Model": "FL-1", "Serial": "123", "WiFi Signal": -40}
        assert wire_to_identity(info) == DeviceIdentity("Acme", "FL-1", "123")

    def test_missing_field_raises(self):
        with pytest.raises(DecodeError) as exc_info:
            wire_to_identity({"Manufacturer": "Acme", "Model": "FL-1"})
        assert "Serial" in str(exc_info.value)
