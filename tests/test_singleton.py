"""
Unit Tests — Singleton Inference
================================
Declared singletons (pass 1) and implicit parents (pass 2).
"""
from aip_reviewer.utils.singleton import infer_singleton_resources, is_singleton_path


def _spec(*paths):
    return {"paths": {p: {} for p in paths}}


class TestInferSingletonResources:

    def test_declared_path_without_id_child(self):
        singletons = infer_singleton_resources(_spec("/v1/settings", "/v1/users", "/v1/users/{id}"))
        assert "/v1/settings" in singletons
        assert "/v1/users" not in singletons

    def test_implicit_parent(self):
        singletons = infer_singleton_resources(_spec("/v1/database/backup", "/v1/database/restore"))
        assert "/v1/database" in singletons

    def test_version_prefix_never_singleton(self):
        singletons = infer_singleton_resources(_spec("/v1/database/backup"))
        assert "/v1" not in singletons

    def test_parent_with_id_child_not_implicit(self):
        singletons = infer_singleton_resources(_spec("/v1/projects/{id}", "/v1/projects/export"))
        assert "/v1/projects" not in singletons

    def test_paths_with_parameters_are_skipped(self):
        singletons = infer_singleton_resources(_spec("/users/{id}/profile"))
        assert all("{" not in s for s in singletons)

    def test_root_path_ignored(self):
        assert "/" not in infer_singleton_resources(_spec("/"))

    def test_empty_spec(self):
        assert infer_singleton_resources({}) == set()


class TestIsSingletonPath:

    def test_exact_and_prefix(self):
        singletons = {"/v1/database"}
        assert is_singleton_path("/v1/database", singletons)
        assert is_singleton_path("/v1/database/backup", singletons)

    def test_prefix_must_be_whole_segment(self):
        assert not is_singleton_path("/v1/databases", {"/v1/database"})
