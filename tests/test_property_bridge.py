"""Tests for the property store, set_property and batches."""

from project.properties import PropertyBatch, PropertyStore, backup_key, set_property


class TestSetProperty:
    """Backup-preserving writes."""

    def test_new_key_has_no_backup(self):
        store = PropertyStore()
        edit = set_property(store, "addScalacArgs", "-Yrangepos")
        assert store == {"addScalacArgs": "-Yrangepos"}
        assert edit.previous_value is None

    def test_existing_value_is_backed_up(self):
        store = PropertyStore({"skipTests": "false"})
        edit = set_property(store, "skipTests", "true")
        assert store.get("skipTests") == "true"
        assert store.get("scoverage.backup.skipTests") == "false"
        assert edit.previous_value == "false"

    def test_stale_backup_is_removed(self):
        store = PropertyStore({"scoverage.backup.skipTests": "old"})
        set_property(store, "skipTests", "true")
        assert "scoverage.backup.skipTests" not in store

    def test_none_removes_key(self):
        store = PropertyStore({"analysisCacheFile": "x"})
        set_property(store, "analysisCacheFile", None)
        assert "analysisCacheFile" not in store
        assert store.get("scoverage.backup.analysisCacheFile") == "x"

    def test_replay_keeps_original_backup(self):
        store = PropertyStore({"maven.test.failure.ignore": "false"})
        set_property(store, "maven.test.failure.ignore", "true")
        set_property(store, "maven.test.failure.ignore", "true")
        backups = [key for key in store if key.startswith("scoverage.backup.")]
        assert backups == ["scoverage.backup.maven.test.failure.ignore"]
        assert store.get("scoverage.backup.maven.test.failure.ignore") == "false"
        assert store.get("maven.test.failure.ignore") == "true"

    def test_changed_value_is_backed_up_again(self):
        store = PropertyStore({"k": "a"})
        set_property(store, "k", "b")
        set_property(store, "k", "c")
        assert store.get(backup_key("k")) == "b"


class TestPropertyBatch:
    """Deferred commits."""

    def test_nothing_written_before_commit(self):
        store = PropertyStore({"a": "1"})
        batch = PropertyBatch().set("a", "2").set("b", "3")
        assert store == {"a": "1"}
        assert batch.keys() == ["a", "b"]

    def test_commit_applies_in_order(self):
        store = PropertyStore({"a": "1"})
        batch = PropertyBatch().set("a", "2").set("b", "3")
        edits = batch.commit(store)
        assert [e.key for e in edits] == ["a", "b"]
        assert store == {"a": "2", "b": "3", "scoverage.backup.a": "1"}
        assert len(batch) == 0

    def test_repeated_key_written_once(self):
        store = PropertyStore({"a": "orig"})
        batch = PropertyBatch().set("a", "forked").set("b", "1").set("a", "final")
        assert batch.keys() == ["a", "b"]
        edits = batch.commit(store)
        assert [e.key for e in edits] == ["a", "b"]
        assert store.get("a") == "final"
        assert store.get(backup_key("a")) == "orig"
