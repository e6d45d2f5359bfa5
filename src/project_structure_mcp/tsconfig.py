from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .errors import ConfigConversionError, ConfigParseError
from .types import ConfigDiagnostic, ResolvedConfig

logger = logging.getLogger(__name__)

TSCONFIG_NAME = "tsconfig.json"

# Analysis-only defaults: permissive about sources, never emits.
DEFAULT_COMPILER_OPTIONS: dict[str, Any] = {
    "allowJs": True,
    "resolveJsonModule": True,
    "esModuleInterop": True,
    "target": "ESNext",
    "module": "ESNext",
    "moduleResolution": "Bundler",
    "skipLibCheck": True,
    "forceConsistentCasingInFileNames": True,
    "noEmit": True,
}


def _enum(*names: str) -> dict[str, str]:
    return {n.lower(): n for n in names}


_TARGETS = _enum(
    "ES3", "ES5", "ES6", "ES2015", "ES2016", "ES2017", "ES2018", "ES2019",
    "ES2020", "ES2021", "ES2022", "ES2023", "ES2024", "ES2025", "ESNext",
)
_MODULES = _enum(
    "None", "CommonJS", "AMD", "UMD", "System", "ES6", "ES2015", "ES2020",
    "ES2022", "ESNext", "Node16", "Node18", "Node20", "NodeNext", "Preserve",
)
_MODULE_RESOLUTION = {
    "classic": "Classic",
    "node": "Node10",
    "node10": "Node10",
    "node16": "Node16",
    "nodenext": "NodeNext",
    "bundler": "Bundler",
}
_JSX = {
    "preserve": "Preserve",
    "react": "React",
    "react-native": "ReactNative",
    "react-jsx": "ReactJSX",
    "react-jsxdev": "ReactJSXDev",
}

# Options accepted under compilerOptions, grouped by value type.
_BOOLEAN_OPTIONS = {
    # emit and build
    "assumeChangesOnlyAffectDirectDependencies", "composite", "declaration",
    "declarationMap", "diagnostics", "emitBOM", "emitDeclarationOnly", "explainFiles",
    "extendedDiagnostics", "importHelpers", "incremental", "inlineSourceMap",
    "inlineSources", "listEmittedFiles", "listFiles", "noCheck", "noEmit",
    "noEmitHelpers", "noEmitOnError", "noErrorTruncation", "preserveConstEnums",
    "preserveWatchOutput", "pretty", "removeComments", "sourceMap", "stripInternal",
    "traceResolution",
    # language and environment
    "allowJs", "checkJs", "downlevelIteration", "emitDecoratorMetadata",
    "erasableSyntaxOnly", "experimentalDecorators", "isolatedDeclarations",
    "isolatedModules", "libReplacement", "noLib", "preserveValueImports",
    "useDefineForClassFields", "verbatimModuleSyntax",
    # type checking
    "allowUnreachableCode", "allowUnusedLabels", "alwaysStrict",
    "exactOptionalPropertyTypes", "keyofStringsOnly", "noFallthroughCasesInSwitch",
    "noImplicitAny", "noImplicitOverride", "noImplicitReturns", "noImplicitThis",
    "noImplicitUseStrict", "noPropertyAccessFromIndexSignature", "noStrictGenericChecks",
    "noUncheckedIndexedAccess", "noUnusedLocals", "noUnusedParameters", "strict",
    "strictBindCallApply", "strictBuiltinIteratorReturn", "strictFunctionTypes",
    "strictNullChecks", "strictPropertyInitialization", "suppressExcessPropertyErrors",
    "suppressImplicitAnyIndexErrors", "useUnknownInCatchVariables",
    # modules and resolution
    "allowArbitraryExtensions", "allowImportingTsExtensions",
    "allowSyntheticDefaultImports", "allowUmdGlobalAccess", "esModuleInterop",
    "noResolve", "noUncheckedSideEffectImports", "preserveSymlinks",
    "resolveJsonModule", "resolvePackageJsonExports", "resolvePackageJsonImports",
    "rewriteRelativeImportExtensions",
    # project and editor
    "disableReferencedProjectLoad", "disableSizeLimit", "disableSolutionSearching",
    "disableSourceOfProjectReferenceRedirect", "forceConsistentCasingInFileNames",
    "skipDefaultLibCheck", "skipLibCheck",
}
_STRING_OPTIONS = {
    "charset", "ignoreDeprecations", "jsxFactory", "jsxFragmentFactory",
    "jsxImportSource", "locale", "mapRoot", "reactNamespace", "sourceRoot",
}
_NUMBER_OPTIONS = {"maxNodeModuleJsDepth"}
_PATH_OPTIONS = {
    "baseUrl", "declarationDir", "generateCpuProfile", "generateTrace", "out",
    "outDir", "outFile", "rootDir", "tsBuildInfoFile",
}
_LIST_OPTIONS = {"customConditions", "lib", "moduleSuffixes", "types"}
_PATH_LIST_OPTIONS = {"rootDirs", "typeRoots"}
_OBJECT_LIST_OPTIONS = {"plugins"}
_OBJECT_OPTIONS = {"paths"}
_ENUM_OPTIONS: dict[str, dict[str, str]] = {
    "target": _TARGETS,
    "module": _MODULES,
    "moduleResolution": _MODULE_RESOLUTION,
    "jsx": _JSX,
    "newLine": {"crlf": "CRLF", "lf": "LF"},
    "moduleDetection": _enum("auto", "legacy", "force"),
    "importsNotUsedAsValues": _enum("remove", "preserve", "error"),
}


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            if ch == "\\":
                out.append(text[i:i + 2])
                i += 2
                continue
            if ch == '"':
                in_string = False
            out.append(ch)
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ConfigParseError("Unterminated block comment")
            i = end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            if ch == "\\":
                out.append(text[i:i + 2])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j < n and text[j] in "}]":
                i += 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def strip_jsonc(text: str) -> str:
    """
    Remove // and /* */ comments and trailing commas, leaving string literals intact.
    tsconfig.json files are allowed to carry both.
    """
    return _strip_trailing_commas(_strip_comments(text))


def parse_config_text(text: str) -> dict[str, Any]:
    cleaned = strip_jsonc(text.lstrip("\ufeff"))
    if not cleaned.strip():
        return {}
    try:
        raw = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"{e.msg} (line {e.lineno}, column {e.colno})") from e
    except RecursionError as e:
        raise ConfigParseError(f"{TSCONFIG_NAME} is nested too deeply to parse") from e
    if not isinstance(raw, dict):
        raise ConfigParseError(f"The root value of a '{TSCONFIG_NAME}' file must be an object.")
    return raw


def _type_error(name: str, type_name: str) -> tuple[str, str]:
    return name, f"Compiler option '{name}' requires a value of type {type_name}."


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def convert_compiler_options(raw: Any, base_dir: str) -> dict[str, Any]:
    """
    Validate a `compilerOptions` object and normalize its values.
    Enum values come back in canonical spelling, path options absolute.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigConversionError([_type_error("compilerOptions", "object")])

    options: dict[str, Any] = {}
    errors: list[tuple[str, str]] = []

    def resolve(p: str) -> str:
        return os.path.normpath(os.path.join(base_dir, p))

    for name, value in raw.items():
        if value is None:
            continue
        if name in _BOOLEAN_OPTIONS:
            if isinstance(value, bool):
                options[name] = value
            else:
                errors.append(_type_error(name, "boolean"))
        elif name in _STRING_OPTIONS:
            if isinstance(value, str):
                options[name] = value
            else:
                errors.append(_type_error(name, "string"))
        elif name in _PATH_OPTIONS:
            if isinstance(value, str):
                options[name] = resolve(value)
            else:
                errors.append(_type_error(name, "string"))
        elif name in _NUMBER_OPTIONS:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                options[name] = value
            else:
                errors.append(_type_error(name, "number"))
        elif name in _LIST_OPTIONS:
            if _is_str_list(value):
                options[name] = list(value)
            else:
                errors.append(_type_error(name, "Array"))
        elif name in _PATH_LIST_OPTIONS:
            if _is_str_list(value):
                options[name] = [resolve(v) for v in value]
            else:
                errors.append(_type_error(name, "Array"))
        elif name in _OBJECT_LIST_OPTIONS:
            if isinstance(value, list) and all(isinstance(v, dict) for v in value):
                options[name] = [dict(v) for v in value]
            else:
                errors.append(_type_error(name, "Array"))
        elif name in _OBJECT_OPTIONS:
            if isinstance(value, dict):
                options[name] = value
            else:
                errors.append(_type_error(name, "object"))
        elif name in _ENUM_OPTIONS:
            allowed = _ENUM_OPTIONS[name]
            canonical = allowed.get(value.lower()) if isinstance(value, str) else None
            if canonical is None:
                choices = ", ".join(f"'{k}'" for k in allowed)
                errors.append((name, f"Argument for '--{name}' option must be: {choices}."))
            else:
                options[name] = canonical
        else:
            errors.append((name, f"Unknown compiler option '{name}'."))

    if errors:
        raise ConfigConversionError(errors)
    return options


def resolve_config(project_root: str | Path) -> ResolvedConfig:
    """
    Defaults, optionally overlaid by the project's tsconfig.json.

    Any problem with the project file is reported as a diagnostic and the
    defaults are kept as-is. noEmit is always true in the result.
    """
    root = os.path.abspath(project_root)
    config_path = os.path.join(root, TSCONFIG_NAME)
    result = ResolvedConfig(options=dict(DEFAULT_COMPILER_OPTIONS))

    if not os.path.isfile(config_path):
        return result
    result.config_path = config_path

    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        result.diagnostics.append(ConfigDiagnostic("read-error", f"Could not read {TSCONFIG_NAME}: {e}"))
        _warn(config_path, result.diagnostics)
        return result

    try:
        parsed = parse_config_text(text)
    except ConfigParseError as e:
        result.diagnostics.append(ConfigDiagnostic("parse-error", str(e)))
        _warn(config_path, result.diagnostics)
        return result

    try:
        overrides = convert_compiler_options(parsed.get("compilerOptions"), root)
    except ConfigConversionError as e:
        result.diagnostics.extend(
            ConfigDiagnostic("conversion-error", msg, option=name) for name, msg in e.errors
        )
        _warn(config_path, result.diagnostics)
        return result

    merged = dict(DEFAULT_COMPILER_OPTIONS)
    merged.update(overrides)
    merged["noEmit"] = True
    result.options = merged
    result.overlay_applied = True
    return result


def _warn(config_path: str, diagnostics: list[ConfigDiagnostic]) -> None:
    for d in diagnostics:
        logger.warning("Ignoring %s (%s): %s. Using defaults.", config_path, d.code, d.message)
