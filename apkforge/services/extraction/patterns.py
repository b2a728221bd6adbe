"""
Text-pattern field extraction.

Configuration files are mined with regular expressions rather than real
parsers, so a malformed Gradle script or manifest still yields whatever can
be found. Every helper returns a ``ServiceResult``: the value on a match, a
diagnostic string otherwise.
"""

from __future__ import annotations

import re

from ...core.types import ServiceResult

# Groovy "minSdkVersion 21", Kotlin DSL "minSdk = 21", both optionally with
# a "Version" suffix and an "=" sign.
_GRADLE_SDK_RE = r"\b{key}(?:Version)?\s*(?:=\s*)?\(?\s*(\d+)"

_GRADLE_STRING_RE = r"""\b{key}\s*(?:=\s*)?\(?\s*["']([^"'\n]+)["']"""

_GRADLE_DEP_RE = re.compile(
    r"\b(?:implementation|api|compileOnly|runtimeOnly|testImplementation|"
    r"androidTestImplementation|debugImplementation|releaseImplementation|kapt|ksp|compile)"
    r"""\s*\(?\s*["']([A-Za-z0-9._-]+:[A-Za-z0-9._-]+)(?::[^"']*)?["']"""
)

_XML_ATTR_RE = r"""\b{attr}\s*=\s*["']([^"']*)["']"""

_XML_ELEMENT_RE = r"<{tag}(?:\s[^>]*)?>\s*(.*?)\s*</{tag}>"

_YAML_SCALAR_RE = r"""^{key}:[ \t]*["']?([^"'#\n]*?)["']?[ \t]*(?:#.*)?$"""

_YAML_BLOCK_KEY_RE = re.compile(r"^[ \t]+([A-Za-z0-9_\-]+):", re.MULTILINE)


def gradle_int(content: str, key: str, source: str) -> ServiceResult[int]:
    """Find the first integer following a Gradle token such as ``minSdk``.

    Args:
        content: Raw Gradle script text.
        key: Token without the ``Version`` suffix (``minSdk``, ``targetSdk``).
        source: File name used in the diagnostic.

    Returns:
        ServiceResult carrying the integer, or a diagnostic on no match.
    """
    match = re.search(_GRADLE_SDK_RE.format(key=re.escape(key)), content)
    if not match:
        return ServiceResult.fail(f"{key}Version not found in {source}")
    return ServiceResult.ok(int(match.group(1)))


def gradle_string(content: str, key: str, source: str) -> ServiceResult[str]:
    """Find the first quoted string following a Gradle token such as ``applicationId``."""
    match = re.search(_GRADLE_STRING_RE.format(key=re.escape(key)), content)
    if not match or not match.group(1).strip():
        return ServiceResult.fail(f"{key} not found in {source}")
    return ServiceResult.ok(match.group(1).strip())


def gradle_dependencies(content: str) -> list[str]:
    """List ``group:artifact`` coordinates declared in a Gradle script, first occurrence order."""
    return _unique(m.group(1) for m in _GRADLE_DEP_RE.finditer(content))


def xml_attribute(content: str, tag: str, attr: str, source: str) -> ServiceResult[str]:
    """Find an attribute on the first ``<tag ...>`` element.

    The search is scoped to the opening tag so that, for instance, the
    ``version`` of the XML declaration is never mistaken for the
    ``version`` of a ``<widget>``.
    """
    element = re.search(rf"<{re.escape(tag)}\b[^>]*>", content)
    if not element:
        return ServiceResult.fail(f"<{tag}> element not found in {source}")
    match = re.search(_XML_ATTR_RE.format(attr=re.escape(attr)), element.group(0))
    if not match or not match.group(1).strip():
        return ServiceResult.fail(f"{attr} attribute not found on <{tag}> in {source}")
    return ServiceResult.ok(match.group(1).strip())


def xml_element_text(content: str, tag: str, source: str) -> ServiceResult[str]:
    """Find the text of the first ``<tag>...</tag>`` element."""
    match = re.search(_XML_ELEMENT_RE.format(tag=re.escape(tag)), content, re.DOTALL | re.IGNORECASE)
    if not match or not match.group(1).strip():
        return ServiceResult.fail(f"<{tag}> not found in {source}")
    return ServiceResult.ok(match.group(1).strip())


def xml_attribute_values(content: str, tag: str, attr: str) -> list[str]:
    """List every ``attr`` value found on ``<tag ...>`` elements."""
    pattern = re.compile(rf"<{re.escape(tag)}\b[^>]*?\b{re.escape(attr)}\s*=\s*[\"']([^\"']+)[\"']")
    return _unique(m.group(1) for m in pattern.finditer(content))


def yaml_scalar(content: str, key: str, source: str) -> ServiceResult[str]:
    """Find a top-level ``key: value`` scalar in YAML-like text."""
    match = re.search(_YAML_SCALAR_RE.format(key=re.escape(key)), content, re.MULTILINE)
    if not match or not match.group(1).strip():
        return ServiceResult.fail(f"{key} not found in {source}")
    return ServiceResult.ok(match.group(1).strip())


def yaml_block_keys(content: str, block: str) -> list[str]:
    """List the keys directly nested under a top-level YAML block such as ``dependencies:``."""
    match = re.search(rf"^{re.escape(block)}:[ \t]*\n((?:(?:[ \t]+.*)?\n)*)", content + "\n", re.MULTILINE)
    if not match:
        return []
    body = match.group(1)
    indents = [len(line) - len(line.lstrip()) for line in body.splitlines() if line.strip()]
    if not indents:
        return []
    first_level = min(indents)
    keys = []
    for key_match in _YAML_BLOCK_KEY_RE.finditer(body):
        line_start = body.rfind("\n", 0, key_match.start()) + 1
        indent = len(body[line_start:key_match.start(1)])
        if indent == first_level:
            keys.append(key_match.group(1))
    return _unique(keys)


def _unique(values) -> list[str]:
    seen: set[str] = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
