"""Tests for the key-value stores and the typed StateStore."""

import json

import pytest

from wleddraw.storage import (
    DEFAULT_PALETTE,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    StateStore,
)


class TestStateStoreDefaults:
    """Empty stores fall back to defaults."""

    @pytest.mark.unit
    def test_empty_store(self, memory_store):
        assert memory_store.get_pixels() is None
        assert memory_store.get_palette() == list(DEFAULT_PALETTE)
        assert memory_store.get_current_color() == "#ff2500"
        assert memory_store.get_grid_size() is None
        assert memory_store.get_debounce_delay() is None
        assert memory_store.get_nightlight_timer() is None
        assert memory_store.get_brightness() is None
        assert memory_store.get_history() == ""


class TestStateStoreRoundTrips:
    """Typed get/set pairs."""

    @pytest.mark.unit
    def test_pixels_stored_comma_joined(self):
        backend = MemoryKeyValueStore()
        store = StateStore(backend)

        store.set_pixels(["#ff0000", "#00ff00"])

        assert backend.get("pixelData") == "#ff0000,#00ff00"
        assert store.get_pixels() == ["#ff0000", "#00ff00"]

    @pytest.mark.unit
    def test_settings(self, memory_store):
        memory_store.set_grid_size(8, 32)
        memory_store.set_debounce_delay(250)
        memory_store.set_nightlight_timer(15)
        memory_store.set_brightness(0)
        memory_store.set_current_color("#ABCDEF")

        assert memory_store.get_grid_size() == (8, 32)
        assert memory_store.get_debounce_delay() == 250
        assert memory_store.get_nightlight_timer() == 15
        assert memory_store.get_brightness() == 0
        assert memory_store.get_current_color() == "#abcdef"

    @pytest.mark.unit
    def test_history_clear(self, memory_store):
        memory_store.set_history("[]")
        memory_store.clear_history()
        assert memory_store.get_history() == ""


class TestStateStoreDecodeFallbacks:
    """Malformed stored values are ignored, never raised."""

    @pytest.mark.unit
    def test_malformed_pixels_become_black(self):
        store = StateStore(MemoryKeyValueStore({"pixelData": "#ff0000,,garbage,#0000FF"}))
        assert store.get_pixels() == ["#ff0000", "#000000", "#000000", "#0000ff"]

    @pytest.mark.unit
    @pytest.mark.parametrize("width,height", [("abc", "8"), ("0", "8"), ("8", "-3"), ("8", "")])
    def test_bad_grid_size_ignored(self, width, height):
        store = StateStore(MemoryKeyValueStore({"gridWidth": width, "gridHeight": height}))
        assert store.get_grid_size() is None

    @pytest.mark.unit
    def test_out_of_range_brightness_ignored(self):
        store = StateStore(MemoryKeyValueStore({"brightness": "999"}))
        assert store.get_brightness() is None

    @pytest.mark.unit
    def test_bad_current_color_falls_back_to_palette(self):
        store = StateStore(MemoryKeyValueStore({"currentColor": "blue", "colorPalette": "#010203"}))
        assert store.get_current_color() == "#010203"

    @pytest.mark.unit
    def test_palette_is_padded_and_cleaned(self):
        store = StateStore(MemoryKeyValueStore({"colorPalette": "#111111,nope,#222222"}))
        palette = store.get_palette()
        assert len(palette) == 8
        assert palette[:2] == ["#111111", "#222222"]
        assert palette[2:] == list(DEFAULT_PALETTE[2:])

    @pytest.mark.unit
    def test_palette_is_truncated(self):
        colors = ",".join(f"#0000{i:02x}" for i in range(10))
        store = StateStore(MemoryKeyValueStore({"colorPalette": colors}))
        assert len(store.get_palette()) == 8


class TestJsonFileKeyValueStore:
    """Test the file backend."""

    @pytest.mark.unit
    def test_implements_protocol(self, temp_dir):
        assert isinstance(JsonFileKeyValueStore(temp_dir / "state.json"), KeyValueStore)
        assert isinstance(MemoryKeyValueStore(), KeyValueStore)

    @pytest.mark.unit
    def test_round_trip_through_disk(self, temp_dir):
        path = temp_dir / "nested" / "state.json"
        JsonFileKeyValueStore(path).set("gridWidth", "12")

        assert json.loads(path.read_text()) == {"gridWidth": "12"}
        assert JsonFileKeyValueStore(path).get("gridWidth") == "12"

    @pytest.mark.unit
    def test_delete(self, temp_dir):
        path = temp_dir / "state.json"
        store = JsonFileKeyValueStore(path)
        store.set("a", "1")
        store.set("b", "2")

        store.delete("a")
        store.delete("missing")

        assert json.loads(path.read_text()) == {"b": "2"}

    @pytest.mark.unit
    def test_corrupt_file_treated_as_empty_and_backed_up(self, temp_dir):
        path = temp_dir / "state.json"
        path.write_text("{not json")
        store = JsonFileKeyValueStore(path)

        assert store.get("pixelData") is None

        store.set("gridWidth", "4")
        assert json.loads(path.read_text()) == {"gridWidth": "4"}
        assert path.with_suffix(".json.bak").read_text() == "{not json"

    @pytest.mark.unit
    def test_non_string_values_ignored(self, temp_dir):
        path = temp_dir / "state.json"
        path.write_text(json.dumps({"gridWidth": 4, "gridHeight": "4"}))
        store = JsonFileKeyValueStore(path)
        assert store.get("gridWidth") is None
        assert store.get("gridHeight") == "4"

    @pytest.mark.unit
    def test_state_store_over_file(self, temp_dir):
        path = temp_dir / "state.json"
        StateStore(JsonFileKeyValueStore(path)).set_pixels(["#ffffff"])
        assert StateStore(JsonFileKeyValueStore(path)).get_pixels() == ["#ffffff"]
