"""
BuildConfiguration model — the aggregate handed to the bundler.

Built fresh by every ``compose()`` call. It is purely declarative: paths,
patterns, loader names and plugin descriptors. ``to_bundler_dict()`` is
the only place that knows the bundler's own key layout.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sitepack.core.models.plugins import PluginDescriptor


class OutputSpec(BaseModel):
    """Where and how bundles are written."""

    path: str
    filename: str
    public_path: str | None = None
    library_target: str | None = None


class LoaderSpec(BaseModel):
    """One loader in a rule's chain, with its query options."""

    loader: str
    options: dict[str, Any] = Field(default_factory=dict)


class ModuleRule(BaseModel):
    """A source-to-artifact transformation rule.

    Attributes:
        name:     Rule key, unique within a configuration.
        test:     Pattern a module path must match.
        flags:    Pattern flags ("i" for case-insensitive).
        exclude:  Pattern of paths the rule never applies to.
        use:      Loader chain, applied right to left by the bundler.
        extract:  Pull the chain's output into the extracted stylesheet.
        fallback: Loader used for a chunk when extraction is not possible.
    """

    name: str
    test: str
    flags: str = ""
    exclude: str | None = None
    use: list[LoaderSpec] = Field(default_factory=list)
    extract: bool = False
    fallback: str | None = None

    @property
    def loader_names(self) -> list[str]:
        return [spec.loader for spec in self.use]


class PostcssPlugin(BaseModel):
    name: str
    options: dict[str, Any] = Field(default_factory=dict)


class ResolveSpec(BaseModel):
    """Module search path hierarchy. Earlier entries shadow later ones."""

    extensions: list[str] = Field(default_factory=list)
    root: list[str] = Field(default_factory=list)
    modules_directories: list[str] = Field(default_factory=list)


class ResolveLoaderSpec(BaseModel):
    """Loader search path hierarchy. Earlier entries shadow later ones."""

    root: list[str] = Field(default_factory=list)


class BuildConfiguration(BaseModel):
    """Complete bundler configuration for one stage.

    Extra keys are allowed: an override hook may hand back a mapping
    carrying bundler options this model does not describe.
    """

    model_config = ConfigDict(extra="allow")

    context: str
    entry: dict[str, list[str] | str]
    output: OutputSpec
    module_rules: list[ModuleRule] = Field(default_factory=list)
    plugins: list[PluginDescriptor] = Field(default_factory=list)
    resolve: ResolveSpec = Field(default_factory=ResolveSpec)
    resolve_loader: ResolveLoaderSpec = Field(default_factory=ResolveLoaderSpec)
    source_map: str | None = None
    postcss: list[PostcssPlugin] = Field(default_factory=list)
    node: dict[str, bool] = Field(default_factory=lambda: {"__filename": True})
    debug: bool = True

    def get_rule(self, name: str) -> ModuleRule | None:
        """Look up a module rule by name."""
        for rule in self.module_rules:
            if rule.name == name:
                return rule
        return None

    def get_plugin(self, kind: str) -> Any | None:
        """Look up the first plugin descriptor of a given kind."""
        for plugin in self.plugins:
            if plugin.kind == kind:
                return plugin
        return None

    @property
    def plugin_kinds(self) -> list[str]:
        """Plugin kinds, in chain order."""
        return [p.kind for p in self.plugins]

    def to_bundler_dict(self) -> dict[str, Any]:
        """Render into the bundler's configuration key layout."""
        output: dict[str, Any] = {
            "path": self.output.path,
            "filename": self.output.filename,
        }
        if self.output.public_path is not None:
            output["publicPath"] = self.output.public_path
        if self.output.library_target is not None:
            output["libraryTarget"] = self.output.library_target

        loaders = []
        for rule in self.module_rules:
            entry: dict[str, Any] = {"name": rule.name, "test": rule.test}
            if rule.flags:
                entry["flags"] = rule.flags
            if rule.exclude is not None:
                entry["exclude"] = rule.exclude
            entry["loaders"] = [spec.model_dump() for spec in rule.use]
            if rule.extract:
                entry["extract"] = {"fallback": rule.fallback}
            loaders.append(entry)

        rendered: dict[str, Any] = {
            "context": self.context,
            "node": dict(self.node),
            "entry": dict(self.entry),
            "debug": self.debug,
            "devtool": self.source_map if self.source_map is not None else False,
            "output": output,
            "resolve": {
                "extensions": list(self.resolve.extensions),
                "root": list(self.resolve.root),
                "modulesDirectories": list(self.resolve.modules_directories),
            },
            "resolveLoader": {"root": list(self.resolve_loader.root)},
            "module": {"loaders": loaders},
            "plugins": [{"name": p.kind, "options": p.options()} for p in self.plugins],
        }
        if self.postcss:
            rendered["postcss"] = [p.model_dump() for p in self.postcss]
        if self.model_extra:
            rendered.update(self.model_extra)
        return rendered
