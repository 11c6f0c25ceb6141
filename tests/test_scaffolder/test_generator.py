"""Tests for the scaffold generator.

Covers:
- Writing a controller under the project root
- Overwrite guard (AlreadyExistsError, no write)
- Skip / overwrite policies for other inputs
- Concurrent batch generation and per-request import isolation
- LocalFileSystem against a real temp directory
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.scaffolder.controller_kind import ControllerKind, controller_kind_path
from src.scaffolder.errors import AlreadyExistsError, EmptyIdentifierError
from src.scaffolder.generator import LocalFileSystem, ScaffoldGenerator
from src.scaffolder.inputs import FileInput, IfExistsAction
from src.scaffolder.resource import Resource


pytestmark = pytest.mark.unit


class _StaticScaffold:
    """Scaffold returning a fixed input, for exercising the policies."""

    def __init__(self, path: str, action: IfExistsAction) -> None:
        self.path = Path(path)
        self.action = action

    def get_input(self, repo: str) -> FileInput:
        return FileInput(
            path=self.path,
            if_exists_action=self.action,
            template_name="controller_kind.go.j2",
            context=ControllerKind(
                resource=Resource.new("app.example.com/v1", "Static")
            ).get_input(repo).context,
        )


# ---------------------------------------------------------------------------
# execute
# ---------------------------------------------------------------------------


class TestExecute:
    @pytest.mark.asyncio
    async def test_writes_controller(self, app_config, app_resource, memory_fs, controller_golden):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        written = await gen.execute(ControllerKind(resource=app_resource))

        expected = app_config.abs_project_path / controller_kind_path(app_resource)
        assert written == [expected]
        assert memory_fs.files[expected] == controller_golden

    @pytest.mark.asyncio
    async def test_existing_file_raises(self, app_config, app_resource, memory_fs):
        target = app_config.abs_project_path / controller_kind_path(app_resource)
        memory_fs.files[target] = "user code"
        gen = ScaffoldGenerator(app_config, fs=memory_fs)

        with pytest.raises(AlreadyExistsError) as exc_info:
            await gen.execute(ControllerKind(resource=app_resource))

        assert exc_info.value.path == target
        assert memory_fs.writes == []
        assert memory_fs.files[target] == "user code"

    @pytest.mark.asyncio
    async def test_existing_file_not_rendered(self, app_config, app_resource, memory_fs):
        memory_fs.files[app_config.abs_project_path / controller_kind_path(app_resource)] = ""
        renderer = MagicMock()
        gen = ScaffoldGenerator(app_config, renderer=renderer, fs=memory_fs)

        with pytest.raises(AlreadyExistsError):
            await gen.execute(ControllerKind(resource=app_resource))
        renderer.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_parse_error_writes_nothing(self, app_config, app_resource, memory_fs):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        with pytest.raises(EmptyIdentifierError):
            await gen.execute(ControllerKind(resource=app_resource, custom_import="k8s.io/api/apps/v1="))
        assert memory_fs.writes == []

    @pytest.mark.asyncio
    async def test_explicit_absolute_path(self, app_config, app_resource, memory_fs, tmp_path):
        target = tmp_path / "elsewhere" / "ctrl.go"
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        written = await gen.execute(ControllerKind(resource=app_resource, path=target))
        assert written == [target]

    @pytest.mark.asyncio
    async def test_skip_policy(self, app_config, memory_fs):
        target = app_config.abs_project_path / "skip.go"
        memory_fs.files[target] = "keep"
        gen = ScaffoldGenerator(app_config, fs=memory_fs)

        written = await gen.execute(_StaticScaffold("skip.go", IfExistsAction.SKIP))

        assert written == []
        assert memory_fs.files[target] == "keep"

    @pytest.mark.asyncio
    async def test_overwrite_policy(self, app_config, memory_fs):
        target = app_config.abs_project_path / "over.go"
        memory_fs.files[target] = "old"
        gen = ScaffoldGenerator(app_config, fs=memory_fs)

        written = await gen.execute(_StaticScaffold("over.go", IfExistsAction.OVERWRITE))

        assert written == [target]
        assert memory_fs.files[target].startswith("package v1\n")

    @pytest.mark.asyncio
    async def test_multiple_scaffolds_in_order(self, app_config, app_resource, memcached_resource, memory_fs):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        written = await gen.execute(
            ControllerKind(resource=app_resource),
            ControllerKind(resource=memcached_resource),
        )
        assert [p.name for p in written] == ["appservice_controller.go", "memcached_controller.go"]

    @pytest.mark.asyncio
    async def test_reports_created_file(self, app_config, app_resource, memory_fs):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        with patch("src.scaffolder.generator.print_success") as mock_print:
            await gen.execute(ControllerKind(resource=app_resource))
        message = mock_print.call_args[0][0]
        assert "pkg/controller/appservice/v1alpha1/appservice_controller.go" in message


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRender:
    def test_render_without_writing(self, app_config, app_resource, memory_fs, controller_golden):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        path, content = gen.render(ControllerKind(resource=app_resource))
        assert path == app_config.abs_project_path / controller_kind_path(app_resource)
        assert content == controller_golden
        assert memory_fs.writes == []


# ---------------------------------------------------------------------------
# generate_controllers
# ---------------------------------------------------------------------------


class TestGenerateControllers:
    @pytest.mark.asyncio
    async def test_batch(self, app_config, app_resource, memcached_resource, memory_fs):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        written = await gen.generate_controllers([app_resource, memcached_resource])
        assert len(written) == 2
        assert len(memory_fs.writes) == 2

    @pytest.mark.asyncio
    async def test_requests_are_isolated(self, app_config, app_resource, memory_fs):
        gen = ScaffoldGenerator(app_config, fs=memory_fs)
        first = ControllerKind(
            resource=app_resource,
            custom_import="k8s.io/api/apps/v1=appsv1",
            path=Path("first.go"),
        )
        second = ControllerKind(
            resource=app_resource,
            custom_import="k8s.io/api/batch/v1=batchv1",
            path=Path("second.go"),
        )
        await asyncio.gather(gen.execute(first), gen.execute(second))

        first_src = memory_fs.files[app_config.abs_project_path / "first.go"]
        second_src = memory_fs.files[app_config.abs_project_path / "second.go"]
        assert "k8s.io/api/apps/v1" in first_src
        assert "k8s.io/api/batch/v1" not in first_src
        assert "k8s.io/api/batch/v1" in second_src
        assert "k8s.io/api/apps/v1" not in second_src

    @pytest.mark.asyncio
    async def test_failure_raised_after_batch(self, app_config, app_resource, memcached_resource, memory_fs):
        memory_fs.files[app_config.abs_project_path / controller_kind_path(app_resource)] = "x"
        gen = ScaffoldGenerator(app_config, fs=memory_fs)

        with pytest.raises(AlreadyExistsError):
            await gen.generate_controllers([app_resource, memcached_resource])

        assert memory_fs.writes == [app_config.abs_project_path / controller_kind_path(memcached_resource)]

    @pytest.mark.asyncio
    async def test_same_destination_in_batch_rejected(self, app_config, memory_fs):
        first = Resource.new("app.example.com/v1", "AppService")
        second = Resource.new("other.example.com/v1", "AppService")
        gen = ScaffoldGenerator(app_config, fs=memory_fs)

        with pytest.raises(AlreadyExistsError) as exc_info:
            await gen.generate_controllers([first, second])

        assert exc_info.value.path == app_config.abs_project_path / controller_kind_path(first)
        assert memory_fs.writes == []

    @pytest.mark.asyncio
    async def test_file_created_between_check_and_write(self, app_config, app_resource, memory_fs):
        target = app_config.abs_project_path / controller_kind_path(app_resource)
        gen = ScaffoldGenerator(app_config, fs=memory_fs)

        with patch.object(memory_fs, "exists", return_value=False):
            memory_fs.files[target] = "user code"
            with pytest.raises(AlreadyExistsError):
                await gen.execute(ControllerKind(resource=app_resource))

        assert memory_fs.files[target] == "user code"


# ---------------------------------------------------------------------------
# LocalFileSystem
# ---------------------------------------------------------------------------


class TestLocalFileSystem:
    def test_write_creates_parents(self, tmp_path: Path):
        fs = LocalFileSystem()
        target = tmp_path / "a" / "b" / "c.go"
        fs.write(target, "package c\n")
        assert target.read_text(encoding="utf-8") == "package c\n"
        assert fs.exists(target)

    def test_exists_false(self, tmp_path: Path):
        assert LocalFileSystem().exists(tmp_path / "missing.go") is False

    def test_exclusive_write_refuses_existing(self, tmp_path: Path):
        target = tmp_path / "c.go"
        target.write_text("keep", encoding="utf-8")
        with pytest.raises(FileExistsError):
            LocalFileSystem().write(target, "new", exclusive=True)
        assert target.read_text(encoding="utf-8") == "keep"

    @pytest.mark.asyncio
    async def test_generate_on_disk(self, app_config, app_resource):
        gen = ScaffoldGenerator(app_config)
        [path] = await gen.execute(ControllerKind(resource=app_resource))
        assert path.read_text(encoding="utf-8").startswith("package v1alpha1\n")
        assert path.parent == app_config.controller_dir / "appservice" / "v1alpha1"

        with pytest.raises(AlreadyExistsError):
            await gen.execute(ControllerKind(resource=app_resource))
