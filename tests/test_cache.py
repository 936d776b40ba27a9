# tests/test_cache.py
import logging

from netlist_core.cache import CoincidenceCache, create_coincidence_key
from netlist_core.extraction import ExtractionConfig, NetlistExtractor, build_point_registry


class TestCoincidenceCacheService:

    def test_hit_and_miss_statistics(self):
        cache = CoincidenceCache()
        assert cache.get(("k",)) is None
        cache.put(("k",), (1, 2))
        assert cache.get(("k",)) == (1, 2)
        assert cache.get_stats() == {'hits': 1, 'misses': 1}
        assert len(cache) == 1

    def test_collision_is_logged(self, caplog):
        cache = CoincidenceCache()
        cache.put(("k",), 1)
        with caplog.at_level(logging.WARNING):
            cache.put(("k",), 2)
        assert "collision" in caplog.text
        assert cache.get(("k",)) == 2

    def test_clear(self):
        cache = CoincidenceCache()
        cache.put(("k",), 1)
        cache.get(("k",))
        cache.clear()
        assert len(cache) == 0
        assert cache.get_stats() == {'hits': 0, 'misses': 0}


class TestCoincidenceKey:

    def test_key_depends_on_geometry_only(self, make_pad):
        first = build_point_registry([make_pad("P1", 0.0, 0.0, name="a")])
        renamed = build_point_registry([make_pad("P1", 0.0, 0.0, name="b")])
        moved = build_point_registry([make_pad("P1", 0.0, 1e-9)])
        assert create_coincidence_key(first, 1e-6, None) == create_coincidence_key(renamed, 1e-6, None)
        assert create_coincidence_key(first, 1e-6, None) != create_coincidence_key(moved, 1e-6, None)

    def test_key_depends_on_matching_parameters(self, make_pad):
        registry = build_point_registry([make_pad("P1", 0.0, 0.0)])
        assert create_coincidence_key(registry, 1e-6, None) != create_coincidence_key(registry, 1e-3, None)
        assert create_coincidence_key(registry, 1e-6, None) != create_coincidence_key(registry, 1e-6, 0.1)


class TestExtractorCaching:

    def test_results_identical_with_and_without_cache(self, resistor_chain):
        cache = CoincidenceCache()
        uncached = NetlistExtractor(resistor_chain).extract()
        first = NetlistExtractor(resistor_chain, cache=cache).extract()
        second = NetlistExtractor(resistor_chain, cache=cache).extract()
        assert uncached == first == second
        assert cache.get_stats() == {'hits': 1, 'misses': 1}

    def test_switch_only_changes_reuse_geometry(self, three_way_switch, make_pad):
        """VERIFIES: the coincidence pass is skipped when only the configuration space changes."""
        cache = CoincidenceCache()
        components = [three_way_switch, make_pad("P1", 0.2, 0.0)]
        NetlistExtractor(components, cache=cache).extract()
        NetlistExtractor(components, config=ExtractionConfig(max_configurations=10), cache=cache).extract()
        assert cache.get_stats()['hits'] == 1
