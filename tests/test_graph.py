"""Tests for the registry data model and the scheduler."""

import pytest

from errors import CyclicDependencyError, RegistryError
from graph.model import File, Reference, Registry
from graph.scheduler import schedule


def ref(target, position=0, length=1):
    return Reference(position=position, length=length, target_path=target)


class TestRegistry:
    """Tests for Registry class."""

    def test_empty_registry(self):
        """Test empty registry initialization."""
        registry = Registry()
        assert len(registry) == 0
        assert registry.paths == []
        assert registry.mapping() == {}

    def test_add_file(self):
        """Test adding files."""
        registry = Registry()
        file = registry.add("css/app.css")

        assert len(registry) == 1
        assert "css/app.css" in registry
        assert file.references == ()
        assert file.hashed_path is None

    def test_references_sorted(self):
        """Test references are stored in position order."""
        registry = Registry()
        file = registry.add("a.css", [ref("b.png", 10, 5), ref("c.png", 2, 3)])
        assert [r.position for r in file.references] == [2, 10]

    def test_overlapping_references_rejected(self):
        """Test overlapping spans cannot be registered."""
        registry = Registry()
        with pytest.raises(RegistryError):
            registry.add("a.css", [ref("b.png", 0, 5), ref("c.png", 4, 2)])

    def test_duplicate_path_rejected(self):
        """Test a path can only be registered once."""
        registry = Registry()
        registry.add("a.css")
        with pytest.raises(RegistryError):
            registry.add("a.css")

    def test_prune_dangling(self):
        """Test references to unknown files are removed."""
        registry = Registry()
        registry.add("bar.css", [ref("foo.jpg", 10, 10), ref("fizz.jpg", 20, 5)])
        registry.add("foo.jpg")

        dropped = registry.prune_dangling()

        assert dropped == [("bar.css", ref("fizz.jpg", 20, 5))]
        assert registry.get("bar.css").references == (ref("foo.jpg", 10, 10),)
        assert registry.get("foo.jpg").references == ()

    def test_single_assignment(self):
        """Test a hashed path can only be assigned once."""
        registry = Registry()
        registry.add("a.png")
        registry.assign_hashed_path("a.png", "a.1234abcd.png")

        assert registry.hashed_path_of("a.png") == "a.1234abcd.png"
        with pytest.raises(RegistryError):
            registry.assign_hashed_path("a.png", "a.ffffffff.png")

    def test_hashed_path_of_unprocessed(self):
        """Test reading a hashed path before processing fails."""
        registry = Registry()
        registry.add("a.png")
        with pytest.raises(RegistryError):
            registry.hashed_path_of("a.png")

    def test_is_ready(self):
        """Test readiness follows the referenced files."""
        registry = Registry()
        file = registry.add("a.css", [ref("foo.jpg", 0), ref("bar.jpg", 5)])
        registry.add("foo.jpg")
        registry.add("bar.jpg")

        registry.assign_hashed_path("foo.jpg", "foo.1.jpg")
        assert not registry.is_ready(file)
        registry.assign_hashed_path("bar.jpg", "bar.2.jpg")
        assert registry.is_ready(file)

    def test_targets_distinct(self):
        """Test repeated targets are listed once."""
        file = File("a.css", (ref("x.png", 0), ref("x.png", 5), ref("y.png", 9)))
        assert file.targets() == ["x.png", "y.png"]

    def test_mapping_requires_all_processed(self):
        """Test the mapping is only available once every file is hashed."""
        registry = Registry()
        registry.add("b.png")
        registry.add("a.png")
        registry.assign_hashed_path("a.png", "a.1.png")
        with pytest.raises(RegistryError):
            registry.mapping()

        registry.assign_hashed_path("b.png", "b.2.png")
        assert list(registry.mapping().items()) == [("a.png", "a.1.png"), ("b.png", "b.2.png")]

    def test_repr(self):
        """Test string representation."""
        registry = Registry()
        registry.add("a.css", [ref("b.png")])
        registry.add("b.png")
        assert "files=2" in repr(registry)
        assert "references=1" in repr(registry)


class TestScheduler:
    """Tests for dependency-ordered processing."""

    def _recorder(self, registry, order):
        def process(file):
            for target in file.targets():
                # Every target must already be hashed.
                registry.hashed_path_of(target)
            order.append(file.path)
            return file.path + ".hashed"
        return process

    def test_chain_order(self):
        """Test a chain A -> B -> C is processed leaf first."""
        registry = Registry()
        registry.add("a.css", [ref("b.css")])
        registry.add("b.css", [ref("c.png")])
        registry.add("c.png")
        order = []

        schedule(registry, self._recorder(registry, order))

        assert order.index("c.png") < order.index("b.css") < order.index("a.css")
        assert registry.mapping()["a.css"] == "a.css.hashed"

    def test_passes_bounded_by_chain(self):
        """Test the number of passes follows the longest chain."""
        registry = Registry()
        registry.add("a.css", [ref("b.css")])
        registry.add("b.css", [ref("c.css")])
        registry.add("c.css", [ref("d.png")])
        registry.add("d.png")

        passes = schedule(registry, lambda f: f.path + ".h")

        assert passes == 4
        assert not registry.unresolved()

    def test_files_without_references(self):
        """Test independent files are processed in one pass."""
        registry = Registry()
        for name in ("a.png", "b.png", "c.png"):
            registry.add(name)
        assert schedule(registry, lambda f: f.path) == 1

    def test_each_file_processed_once(self):
        """Test shared dependencies are not processed twice."""
        registry = Registry()
        registry.add("a.css", [ref("shared.png")])
        registry.add("b.css", [ref("shared.png")])
        registry.add("shared.png")
        order = []

        schedule(registry, self._recorder(registry, order))

        assert sorted(order) == ["a.css", "b.css", "shared.png"]

    def test_cycle_detected(self):
        """Test a cycle A -> B -> A aborts instead of looping."""
        registry = Registry()
        registry.add("a.css", [ref("b.css")])
        registry.add("b.css", [ref("a.css")])
        registry.add("c.png")
        order = []

        with pytest.raises(CyclicDependencyError) as excinfo:
            schedule(registry, self._recorder(registry, order))

        assert excinfo.value.paths == ["a.css", "b.css"]
        assert order == ["c.png"]

    def test_self_reference_is_cycle(self):
        """Test a file referencing itself can never be ready."""
        registry = Registry()
        registry.add("a.css", [ref("a.css")])
        with pytest.raises(CyclicDependencyError):
            schedule(registry, lambda f: f.path)

    def test_unpruned_reference(self):
        """Test a reference to an unregistered file is a registry error."""
        registry = Registry()
        registry.add("a.css", [ref("missing.png")])
        with pytest.raises(RegistryError):
            schedule(registry, lambda f: f.path)

    def test_empty_registry(self):
        """Test nothing to do means zero passes."""
        assert schedule(Registry(), lambda f: f.path) == 0
