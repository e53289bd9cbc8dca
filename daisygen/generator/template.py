"""Renders complete Phoenix.Component modules from component specifications."""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import ComponentSpec
from . import component_builder, example_builder, helpers

MODULE_TEMPLATE = "component.ex.j2"

_BLANK_RUN_RE = re.compile(r"\n{3,}")


class ModuleRenderer:
    """Assembles module source from builder fragments and a Jinja2 template."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, spec: ComponentSpec) -> str:
        template = self._env.get_template(MODULE_TEMPLATE)
        code = template.render(
            spec=spec,
            usage=build_example_usage(spec),
            attrs=component_builder.build_attrs(spec),
            component_function=component_builder.build_component_function(spec),
            class_helpers=component_builder.build_class_helpers(spec),
            examples=example_builder.build_all_examples(spec.title_groups).rstrip(),
        )
        return format_code(code)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


def render_module(spec: ComponentSpec) -> str:
    """Generate complete module code from a ComponentSpec."""
    return ModuleRenderer().render(spec)


def build_example_usage(spec: ComponentSpec) -> str:
    """One-line usage snippet for the module documentation."""
    component_name = helpers.to_file_name(spec.name)
    html_tag = component_builder.infer_html_tag(spec.base_class)
    if component_builder.is_void_element(html_tag):
        if spec.base_class == "input":
            return f'<.{component_name} type="text" placeholder="Type here" />'
        return f"<.{component_name} />"
    return f"<.{component_name}>Content</.{component_name}>"


def format_code(code: str) -> str:
    return _BLANK_RUN_RE.sub("\n\n", code).strip() + "\n"


__all__ = ["ModuleRenderer", "build_example_usage", "format_code", "render_module"]
