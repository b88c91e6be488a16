"""Tests for the workspace scan engine."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from surfacemap.scanner import engine as engine_module
from surfacemap.scanner.emitter import FindingCollector
from surfacemap.scanner.engine import ScanEngine
from surfacemap.scanner.errors import FileReadError, WorkspaceNotFoundError


def _write(root: Path, name: str, content: str) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestScanEngine:
    def test_scan_sample_app(self, sample_app_dir: Path):
        result = ScanEngine().scan(sample_app_dir)

        assert result.files_scanned == 3
        assert not result.cancelled
        files = {Path(f.file_path).name for f in result.findings}
        assert files == {"api.py", "routes.go", "server.js"}
        # README.txt is not a source file
        assert not any("/not/source" in f.message for f in result.findings)

        js = [f for f in result.findings if f.file_path.endswith("server.js")]
        endpoints = [f.endpoint for f in js if f.rule_id == "ATTACK-001"]
        assert endpoints == [
            "/api/products",
            "/api/checkout",
            "/admin/settings",
            "/api/upload",
        ]
        assert any(f.rule_id == "ATTACK-005" for f in js)

    def test_findings_are_grouped_per_file_in_walk_order(self, tmp_path: Path):
        _write(tmp_path, "b.js", "app.get('/b1', f)\napp.get('/b2', f)\n")
        _write(tmp_path, "a.js", "app.get('/a1', f)\n")
        _write(tmp_path, "sub/c.go", 'http.HandleFunc("/c", h)\n')

        result = ScanEngine().scan(tmp_path)
        located = [
            (Path(f.file_path).name, f.start_line)
            for f in result.findings
            if f.rule_id == "ATTACK-001"
        ]
        assert located == [("a.js", 1), ("b.js", 1), ("b.js", 2), ("c.go", 1)]

    def test_skips_vendor_directories(self, tmp_path: Path):
        _write(tmp_path, "node_modules/express/index.js", "app.get('/vendored', f)\n")
        _write(tmp_path, "vendor/lib/lib.go", 'http.HandleFunc("/vendored", h)\n')
        _write(tmp_path, "pkg.egg-info/x.py", '@app.route("/vendored")\n')
        _write(tmp_path, "app.js", "app.get('/mine', f)\n")

        result = ScanEngine().scan(tmp_path)
        assert result.files_scanned == 1
        assert {f.endpoint for f in result.findings} == {"/mine"}

    def test_exclude_patterns(self, tmp_path: Path):
        _write(tmp_path, "app.js", "app.get('/keep', f)\n")
        _write(tmp_path, "app.test.js", "app.get('/skip', f)\n")
        _write(tmp_path, "fixtures/data.js", "app.get('/skip', f)\n")

        engine = ScanEngine(exclude_patterns=["*.test.js", "fixtures"])
        result = engine.scan(tmp_path)
        assert {f.endpoint for f in result.findings} == {"/keep"}

    def test_large_files_are_skipped(self, tmp_path: Path):
        _write(tmp_path, "big.js", "app.get('/big', f)\n" + "// padding\n" * 20)
        _write(tmp_path, "small.js", "app.get('/s', f)\n")

        result = ScanEngine(max_file_size=64).scan(tmp_path)
        assert result.files_scanned == 1
        assert result.files_skipped == 1
        assert {f.endpoint for f in result.findings} == {"/s"}

    def test_no_size_limit_by_default(self, tmp_path: Path):
        _write(tmp_path, "server.js", "app.get('/admin/x', fn)\n" + "// padding\n" * 120_000)

        result = ScanEngine().scan(tmp_path)
        assert result.files_scanned == 1
        assert result.files_skipped == 0
        assert [f.rule_id for f in result.findings] == [
            "ATTACK-001",
            "ATTACK-002",
            "ATTACK-003",
        ]

    def test_missing_workspace_raises(self, tmp_path: Path):
        with pytest.raises(WorkspaceNotFoundError):
            ScanEngine().scan(tmp_path / "nope")

    def test_file_workspace_raises(self, tmp_path: Path):
        path = _write(tmp_path, "app.js", "")
        with pytest.raises(WorkspaceNotFoundError):
            ScanEngine().scan(path)

    def test_read_failure_does_not_abort_scan(self, tmp_path: Path, monkeypatch):
        _write(tmp_path, "a.js", "app.get('/a', f)\n")
        _write(tmp_path, "b.js", "app.get('/b', f)\n")
        real_analyze = engine_module.analyze_file

        def flaky(path, ecosystem, registry):
            if Path(path).name == "a.js":
                raise FileReadError(str(path), OSError(5, "Input/output error"))
            return real_analyze(path, ecosystem, registry)

        monkeypatch.setattr(engine_module, "analyze_file", flaky)
        result = ScanEngine().scan(tmp_path)
        assert result.files_failed == 1
        assert result.files_scanned == 1
        assert {f.endpoint for f in result.findings} == {"/b"}

    def test_sink_receives_findings_in_order(self, tmp_path: Path):
        _write(tmp_path, "a.js", "app.get('/admin', f)\n")
        sink = FindingCollector()
        result = ScanEngine().scan(tmp_path, sink=sink)
        assert sink.findings == result.findings
        assert [f.rule_id for f in sink.findings] == [
            "ATTACK-001",
            "ATTACK-002",
            "ATTACK-003",
        ]

    def test_scan_twice_is_identical(self, sample_app_dir: Path):
        engine = ScanEngine()
        assert engine.scan(sample_app_dir).findings == engine.scan(sample_app_dir).findings

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            ScanEngine(workers=0)


class TestCancellation:
    def test_cancelled_before_start(self, tmp_path: Path):
        _write(tmp_path, "a.js", "app.get('/a', f)\n")
        cancel = threading.Event()
        cancel.set()

        result = ScanEngine().scan(tmp_path, cancel=cancel)
        assert result.cancelled
        assert result.files_scanned == 0
        assert result.findings == []

    def test_cancel_between_files_keeps_partial_results(self, tmp_path: Path):
        for name in ("a.js", "b.js", "c.js"):
            _write(tmp_path, name, f"app.get('/{name}', f)\n")
        cancel = threading.Event()

        class CancellingSink:
            def emit(self, finding):
                cancel.set()

        result = ScanEngine().scan(tmp_path, cancel=cancel, sink=CancellingSink())
        assert result.cancelled
        assert result.files_scanned == 1
        assert {f.endpoint for f in result.findings} == {"/a.js"}

    def test_concurrent_scan_honours_cancel(self, tmp_path: Path):
        _write(tmp_path, "a.js", "app.get('/a', f)\n")
        cancel = threading.Event()
        cancel.set()

        result = ScanEngine(workers=4).scan(tmp_path, cancel=cancel)
        assert result.cancelled
        assert result.files_scanned == 0


class TestConcurrentScan:
    def test_matches_sequential_order(self, tmp_path: Path):
        for i in range(9):
            _write(
                tmp_path,
                f"pkg{i % 3}/handlers{i}.js",
                f"app.get('/r{i}', f)\napp.post('/admin/{i}', f)\n"
                + ("app.use(requireAuth)\n" if i % 2 else ""),
            )
        _write(tmp_path, "main.go", 'http.HandleFunc("/debug/vars", h)\n')

        sequential = ScanEngine(workers=1).scan(tmp_path)
        concurrent = ScanEngine(workers=4).scan(tmp_path)

        assert concurrent.files_scanned == sequential.files_scanned == 10
        assert concurrent.findings == sequential.findings
