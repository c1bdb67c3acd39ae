"""
Module rule builder — which loader chain handles which source files.

Shared by every stage: scripts, JSON, images and fonts. Stylesheets are
where the stages differ:

  develop            inject at runtime (style loader), readable
                     scoped class names for debugging
  build-css          extract everything into styles.css, minified
  build-html         plain CSS → null loader; styles.css already exists
  build-javascript   and must not be duplicated. Scoped ("module") CSS is
                     still extracted: its class names are referenced by
                     rendered markup and runtime code.
"""

from __future__ import annotations

from sitepack.core.models.build_config import LoaderSpec, ModuleRule, PostcssPlugin
from sitepack.core.models.stage import Stage, StageResolution

# Assets at or below this size (bytes) are inlined as data URLs.
INLINE_LIMIT = 10000

CSS_TEST = r"\.css$"
CSS_MODULES_TEST = r"\.module\.css$"
_FONT_VERSION = r"(\?v=[0-9]\.[0-9]\.[0-9])?$"

_CSS_MODULES_OPTIONS = {"modules": True, "minimize": True, "importLoaders": 1}
_CSS_MODULES_DEV_OPTIONS = {
    **_CSS_MODULES_OPTIONS,
    "sourceMap": True,
    "localIdentName": "[name]---[local]---[hash:base64:5]",
}

_BROWSERS = "last 2 versions"


# ── Script compiler options ─────────────────────────────────────


def compiler_options(requested: Stage) -> dict:
    """Options for the script compiler loader.

    Keyed on the *requested* stage: ``develop-html`` compiles like
    ``develop`` but without the hot-reload transform, since the HTML
    renderer has no live-reload client.
    """
    plugins = ["add-module-exports", "transform-object-assign"]
    if requested is Stage.DEVELOP:
        plugins.append("react-hot-loader/babel")
    return {
        "presets": ["react", "es2015", "stage-0"],
        "plugins": plugins,
    }


# ── Rules ───────────────────────────────────────────────────────


def _shared_rules(requested: Stage) -> list[ModuleRule]:
    return [
        ModuleRule(
            name="cjsx",
            test=r"\.cjsx$",
            use=[LoaderSpec(loader="coffee"), LoaderSpec(loader="cjsx")],
        ),
        ModuleRule(
            name="js",
            test=r"\.jsx?$",
            exclude=r"(node_modules|bower_components)",
            use=[LoaderSpec(loader="babel", options=compiler_options(requested))],
        ),
        ModuleRule(name="coffee", test=r"\.coffee$", use=[LoaderSpec(loader="coffee")]),
        ModuleRule(name="json", test=r"\.json$", use=[LoaderSpec(loader="json")]),
        ModuleRule(
            name="images",
            test=r"\.(jpe?g|png|gif|svg)(\?.*)?$",
            flags="i",
            use=[LoaderSpec(loader="url-loader", options={"limit": INLINE_LIMIT})],
        ),
        ModuleRule(
            name="woff",
            test=r"\.woff(2)?" + _FONT_VERSION,
            use=[LoaderSpec(
                loader="url-loader",
                options={"limit": INLINE_LIMIT, "mimetype": "application/font-woff"},
            )],
        ),
        ModuleRule(name="ttf", test=r"\.(ttf)" + _FONT_VERSION, use=[LoaderSpec(loader="file-loader")]),
        ModuleRule(name="eot", test=r"\.(eot)" + _FONT_VERSION, use=[LoaderSpec(loader="file-loader")]),
    ]


def _extracted_css_modules() -> ModuleRule:
    return ModuleRule(
        name="css-modules",
        test=CSS_MODULES_TEST,
        use=[
            LoaderSpec(loader="css", options=dict(_CSS_MODULES_OPTIONS)),
            LoaderSpec(loader="postcss"),
        ],
        extract=True,
        fallback="style",
    )


def _stylesheet_rules(stage: Stage) -> list[ModuleRule]:
    if stage is Stage.DEVELOP:
        return [
            ModuleRule(
                name="css",
                test=CSS_TEST,
                exclude=CSS_MODULES_TEST,
                use=[LoaderSpec(loader="style"), LoaderSpec(loader="css"), LoaderSpec(loader="postcss")],
            ),
            ModuleRule(
                name="css-modules",
                test=CSS_MODULES_TEST,
                use=[
                    LoaderSpec(loader="style"),
                    LoaderSpec(loader="css", options=dict(_CSS_MODULES_DEV_OPTIONS)),
                    LoaderSpec(loader="postcss"),
                ],
            ),
        ]

    if stage is Stage.BUILD_CSS:
        return [
            ModuleRule(
                name="css",
                test=CSS_TEST,
                exclude=CSS_MODULES_TEST,
                use=[LoaderSpec(loader="css", options={"minimize": True}), LoaderSpec(loader="postcss")],
                extract=True,
            ),
            _extracted_css_modules(),
        ]

    # build-html / build-javascript: the null loader satisfies the import
    # and emits nothing.
    return [
        ModuleRule(name="css", test=CSS_TEST, exclude=CSS_MODULES_TEST, use=[LoaderSpec(loader="null")]),
        _extracted_css_modules(),
    ]


def build_module_rules(resolution: StageResolution) -> list[ModuleRule]:
    """Ordered transformation rules for a stage."""
    return _shared_rules(resolution.requested) + _stylesheet_rules(resolution.stage)


def build_postcss_plugins(stage: Stage) -> list[PostcssPlugin]:
    """PostCSS pipeline behind the ``postcss`` loader."""
    if stage is Stage.DEVELOP:
        return [
            PostcssPlugin(name="postcss-import", options={"addDependencyTo": True}),
            PostcssPlugin(name="postcss-cssnext", options={"browsers": _BROWSERS}),
            PostcssPlugin(name="postcss-browser-reporter"),
            PostcssPlugin(name="postcss-reporter"),
        ]
    if stage is Stage.BUILD_CSS:
        return [
            PostcssPlugin(name="postcss-import"),
            PostcssPlugin(name="postcss-cssnext", options={"browsers": _BROWSERS}),
        ]
    return []
