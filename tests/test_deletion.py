"""Unit tests for DeletionExecutor."""

from kubeclean.deletion import DeletionExecutor, DeletionReport
from conftest import FakeClient, config_map


class TestDeletionExecutor:
    """Test cases for sequential best-effort deletion."""

    def test_deletes_each_name_in_order(self, output):
        """Test that every name is deleted, sorted, one call each."""
        client = FakeClient({"ConfigMap": [config_map("b"), config_map("a")]})
        report = DeletionExecutor(client, output).delete_all("ConfigMap", "default", ["b", "a"])
        assert client.delete_calls == [
            ("ConfigMap", "default", "a"),
            ("ConfigMap", "default", "b"),
        ]
        assert report.deleted == ["a", "b"]
        assert report.ok
        assert client.objects["ConfigMap"] == []

    def test_failure_does_not_abort(self, output, capsys):
        """Test that a failed delete is reported and the rest still run."""
        client = FakeClient(delete_errors=["b"])
        report = DeletionExecutor(client, output).delete_all("ConfigMap", None, ["a", "b", "c"])
        assert [call[2] for call in client.delete_calls] == ["a", "b", "c"]
        assert report.deleted == ["a", "c"]
        assert list(report.failed) == ["b"]
        assert "cannot delete b" in report.failed["b"]
        assert not report.ok

        err = capsys.readouterr().err
        assert "Failed to delete ConfigMap b" in err
        assert "1 could not be deleted: b" in err

    def test_nothing_to_delete(self, output):
        """Test that an empty candidate list issues no calls."""
        client = FakeClient()
        report = DeletionExecutor(client, output).delete_all("ConfigMap", None, [])
        assert client.delete_calls == []
        assert report == DeletionReport()

    def test_os_error_does_not_abort(self, output, capsys):
        """Test that an OSError from one delete leaves the rest to run."""

        class UnexecutableClient(FakeClient):
            def delete(self, kind, namespace, name):
                if name == "a":
                    self.delete_calls.append((kind, namespace, name))
                    raise PermissionError(13, "Permission denied", "kubectl")
                super().delete(kind, namespace, name)

        client = UnexecutableClient()
        report = DeletionExecutor(client, output).delete_all("ConfigMap", None, ["a", "b"])
        assert [call[2] for call in client.delete_calls] == ["a", "b"]
        assert report.deleted == ["b"]
        assert list(report.failed) == ["a"]
        assert "Permission denied" in report.failed["a"]
        assert "Failed to delete ConfigMap a" in capsys.readouterr().err
