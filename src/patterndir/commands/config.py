"""Config commands -- view and modify global configuration.

Provides the ``patterndir config`` sub-command group for reading and
updating the user's global configuration file
(:class:`~patterndir.models.GlobalConfig`).
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Optional, get_origin

import typer
from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from patterndir.output import error, format_response, info, success

config_app = typer.Typer(no_args_is_help=True)


def _is_section(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _lookup_field(model: type[BaseModel], key: str) -> Optional[FieldInfo]:
    """Return the leaf setting *key* (dot notation) names on *model*, if any."""
    *sections, leaf = key.split(".")
    for name in sections:
        field = model.model_fields.get(name)
        if field is None or not _is_section(field.annotation):
            return None
        model = field.annotation
    field = model.model_fields.get(leaf)
    if field is None or _is_section(field.annotation):
        return None
    return field


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Example::

        patterndir config show --json
    """
    from patterndir.config import get_config_dir, resolve_config

    config = resolve_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'directory.locale')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    *key* must name a single setting of
    :class:`~patterndir.models.GlobalConfig`, not a whole section. List
    settings take a comma-separated value; everything else is coerced by the
    model itself, so ``true``/``false`` and numeric strings work as expected.

    Example::

        patterndir config set directory.locale de_DE
        patterndir config set cache.ttl_seconds 600
        patterndir config set plugins.disabled preview-links,stats
    """
    from patterndir.config import load_global_config, save_global_config
    from patterndir.models import GlobalConfig

    field = _lookup_field(GlobalConfig, key)
    if field is None:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    raw: Any = value
    if get_origin(field.annotation) is list:
        raw = [part.strip() for part in value.split(",") if part.strip()]

    data = load_global_config().model_dump(mode="json")
    *sections, leaf = key.split(".")
    reduce(lambda section, name: section[name], sections, data)[leaf] = raw

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        reasons = "; ".join(err["msg"] for err in exc.errors())
        error(f"Invalid value for {key}: {reasons}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {reduce(getattr, key.split('.'), new_config)}")
