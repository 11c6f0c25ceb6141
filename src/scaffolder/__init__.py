"""Operator controller scaffolder -- generates Go controller source files.

This module resolves the package imports a generated controller needs
(including a caller-supplied custom API import) and renders the controller
template against them.

Quick usage::

    from src.config import Config
    from src.scaffolder import ControllerKind, Resource, ScaffoldGenerator

    resource = Resource.new("app.example.com/v1alpha1", "AppService")
    generator = ScaffoldGenerator(Config(abs_project_path="/tmp/app-operator"))
    written = await generator.execute(
        ControllerKind(resource=resource, custom_import="k8s.io/api/apps/v1=appsv1")
    )
"""

from src.scaffolder.controller_kind import ControllerKind
from src.scaffolder.errors import (
    AlreadyExistsError,
    CustomImportError,
    EmptyIdentifierError,
    EmptyPathError,
    ResourceError,
    ScaffoldError,
)
from src.scaffolder.generator import LocalFileSystem, ScaffoldGenerator
from src.scaffolder.imports import ImportTable, merge_import, parse_custom_import
from src.scaffolder.inputs import FileInput, IfExistsAction
from src.scaffolder.resource import Resource
from src.scaffolder.templates import TemplateRenderer

__all__ = [
    "AlreadyExistsError",
    "ControllerKind",
    "CustomImportError",
    "EmptyIdentifierError",
    "EmptyPathError",
    "FileInput",
    "IfExistsAction",
    "ImportTable",
    "LocalFileSystem",
    "Resource",
    "ResourceError",
    "ScaffoldError",
    "ScaffoldGenerator",
    "TemplateRenderer",
    "merge_import",
    "parse_custom_import",
]
