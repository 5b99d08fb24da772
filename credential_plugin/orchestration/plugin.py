"""
Plugin entry point.

The build orchestrator hands over its mutable project configuration and,
optionally, the plugin options from app.json. The entry point picks the
Android package, runs the mutation pipeline for the Android platform and
records the outcome on the configuration handle.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .. import PLUGIN_NAME
from ..core.config import Config, get_config
from ..core.exceptions import PipelineError, StructuralMismatchError, ValidationError
from ..core.logging import get_logger
from ..models.project import AndroidSection, ModRequest, PluginProps, ProjectConfig
from .pipeline import MutationPipeline

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def resolve_android_package(
    config: ProjectConfig,
    props: PluginProps | None = None,
    settings: Config | None = None,
) -> str:
    """Pick the package: plugin option, then the app's own package, then the default."""
    settings = settings or get_config()
    if props and props.android_package:
        return props.android_package
    if config.android.package and config.android.package.strip():
        return config.android.package
    return settings.default_android_package


async def with_google_credential_manager(
    config: ProjectConfig,
    props: PluginProps | None = None,
    pipeline: MutationPipeline | None = None,
    settings: Config | None = None,
) -> ProjectConfig:
    """Apply the Google Credential Manager integration to the native project.

    Args:
        config: Mutable project configuration from the orchestrator
        props: Plugin options (``androidPackage``)
        pipeline: Pipeline to run; a local-filesystem one by default
        settings: Plugin settings; the environment-derived ones by default

    Returns:
        The same configuration handle, with the run appended to
        ``plugin_history``.

    Raises:
        PipelineError: If a fatal step failed. The build cannot proceed.
    """
    if config.mod_request.platform != "android":
        logger.info("Skipping non-Android platform", platform=config.mod_request.platform)
        return config

    android_package = resolve_android_package(config, props, settings)
    logger.info("Using Android package", package=android_package)

    pipeline = pipeline or MutationPipeline()
    result = await pipeline.run(config.mod_request.platform_project_root, android_package)
    config.plugin_history.append(result)

    if not result.success:
        failed = result.get_step(result.failed_step or "")
        cause = None
        if failed is not None and failed.metadata.get("structural_mismatch"):
            cause = StructuralMismatchError(
                message=failed.message,
                path=failed.target,
                anchor=failed.metadata.get("anchor", ""),
            )
        raise PipelineError(
            message=result.error or "Prebuild mutation failed",
            step=result.failed_step or "",
            run_id=result.run_id,
            cause=cause,
        )

    return config


def _validate_section(model: type[ModelT], data: Any, field_name: str) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid {field_name} in app config",
            field_name=field_name,
            actual_value=data,
            cause=e,
        ) from e


def _find_plugin_props(plugins: list[Any]) -> PluginProps | None:
    for entry in plugins:
        if entry == PLUGIN_NAME:
            return PluginProps()
        if isinstance(entry, list) and entry and entry[0] == PLUGIN_NAME:
            options = entry[1] if len(entry) > 1 and entry[1] else {}
            return _validate_section(PluginProps, options, "plugins")
    return None


def load_project_config(
    project_dir: Path,
    settings: Config | None = None,
) -> tuple[ProjectConfig, PluginProps | None]:
    """Build the configuration handle for a project directory from its app.json.

    A missing app.json yields a bare configuration with no package and no
    plugin props.

    Raises:
        ValidationError: If app.json is not a JSON object, or one of the
            sections the plugin reads has the wrong shape.
    """
    settings = settings or get_config()
    mod_request = ModRequest(
        platform_project_root=settings.platform_root(project_dir),
        platform=settings.platform.target,
    )
    app_config_path = project_dir / settings.defaults.app_config_file

    if not app_config_path.exists():
        logger.debug("No app config found", path=str(app_config_path))
        return ProjectConfig(mod_request=mod_request), None

    try:
        raw = json.loads(app_config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(
            message=f"Invalid JSON in {app_config_path.name}",
            field_name=app_config_path.name,
            cause=e,
        ) from e
    if not isinstance(raw, dict):
        raise ValidationError(
            message=f"{app_config_path.name} must contain a JSON object",
            field_name=app_config_path.name,
            actual_value=type(raw).__name__,
        )

    expo = raw.get("expo", raw)
    if not isinstance(expo, dict):
        raise ValidationError(
            message="The expo section must be a JSON object",
            field_name="expo",
            actual_value=type(expo).__name__,
        )

    plugins = expo.get("plugins") or []
    if not isinstance(plugins, list):
        raise ValidationError(
            message="The plugins section must be a list",
            field_name="plugins",
            actual_value=type(plugins).__name__,
        )

    name = expo.get("name")
    config = ProjectConfig(
        name=name if isinstance(name, str) else "",
        android=_validate_section(AndroidSection, expo.get("android") or {}, "android"),
        mod_request=mod_request,
    )
    return config, _find_plugin_props(plugins)
