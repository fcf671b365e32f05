"""Load a MavenProject from a pom.xml file."""
from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

from constants import Constants
from project.model import Dependency, MavenProject
from project.properties import PropertyStore

logger = logging.getLogger(__name__)

_REFERENCE_RE = re.compile(r"\$\{([^}]+)\}")


def _namespace(root: ET.Element) -> str:
    """Return the ``{uri}`` prefix used by ``root`` or an empty string."""
    if root.tag.startswith("{"):
        return root.tag[: root.tag.index("}") + 1]
    return ""


def _text(node: Optional[ET.Element], path: str, ns: str) -> Optional[str]:
    if node is None:
        return None
    found = node.find("/".join(f"{ns}{part}" for part in path.split("/")))
    if found is None or found.text is None:
        return None
    return found.text.strip()


def interpolate(value: Optional[str], context: Dict[str, str]) -> Optional[str]:
    """Replace ``${name}`` references found in ``context``; unknown ones stay verbatim."""
    if value is None:
        return None
    return _REFERENCE_RE.sub(lambda m: context.get(m.group(1), m.group(0)), value)


def _read_properties(root: ET.Element, ns: str) -> Dict[str, str]:
    props: Dict[str, str] = {}
    node = root.find(f"{ns}properties")
    if node is None:
        return props
    for child in node:
        if not isinstance(child.tag, str):
            continue  # comments
        name = child.tag[len(ns):] if ns and child.tag.startswith(ns) else child.tag
        props[name] = (child.text or "").strip()
    return props


def _read_dependencies(root: ET.Element, ns: str, context: Dict[str, str]) -> List[Dependency]:
    """Direct dependencies only; dependencyManagement and plugin dependencies are ignored."""
    deps: List[Dependency] = []
    node = root.find(f"{ns}dependencies")
    if node is None:
        return deps
    for dependency in node.findall(f"{ns}dependency"):
        group = _text(dependency, "groupId", ns)
        artifact = _text(dependency, "artifactId", ns)
        if not group or not artifact:
            continue
        deps.append(Dependency(
            group_id=interpolate(group, context),
            artifact_id=interpolate(artifact, context),
            version=interpolate(_text(dependency, "version", ns), context),
            scope=_text(dependency, "scope", ns) or "compile",
        ))
    return deps


def load_project(pom_path: str) -> MavenProject:
    """Parse ``pom_path`` into a MavenProject.

    Raises:
        FileNotFoundError: the file does not exist.
        ET.ParseError: the file is not well-formed XML.
    """
    path = Path(pom_path)
    if path.is_dir():
        path = path / Constants.POM_XML_FILE
    tree = ET.parse(path)
    root = tree.getroot()
    ns = _namespace(root)
    basedir = path.resolve().parent

    parent = root.find(f"{ns}parent")
    group_id = _text(root, "groupId", ns) or _text(parent, "groupId", ns)
    artifact_id = _text(root, "artifactId", ns)
    version = _text(root, "version", ns) or _text(parent, "version", ns)
    packaging = _text(root, "packaging", ns) or Constants.DEFAULT_PACKAGING

    properties = _read_properties(root, ns)
    context: Dict[str, str] = dict(properties)
    context.update({
        "basedir": str(basedir),
        "project.basedir": str(basedir),
        "project.groupId": group_id or "",
        "project.artifactId": artifact_id or "",
        "project.version": version or "",
    })

    build = root.find(f"{ns}build")
    build_directory = interpolate(_text(build, "directory", ns), context)
    build_directory_path = Path(build_directory) if build_directory else basedir / "target"
    if not build_directory_path.is_absolute():
        build_directory_path = basedir / build_directory_path
    context["project.build.directory"] = str(build_directory_path)

    final_name = interpolate(_text(build, "finalName", ns), context)
    if not final_name:
        final_name = f"{artifact_id}-{version}" if version else artifact_id

    source_roots = _source_roots(build, ns, context, basedir)

    project = MavenProject(
        basedir=basedir,
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        packaging=packaging,
        dependencies=_read_dependencies(root, ns, context),
        compile_source_roots=source_roots,
        properties=PropertyStore(properties),
        build_directory=build_directory_path,
        final_name=final_name,
    )
    logger.debug(
        "Loaded project %s:%s:%s (%s) with %d direct dependencies",
        group_id, artifact_id, version, packaging, len(project.dependencies),
    )
    return project


def _source_roots(build: Optional[ET.Element], ns: str, context: Dict[str, str], basedir: Path) -> List[str]:
    declared = interpolate(_text(build, "sourceDirectory", ns), context)
    roots: List[str] = []
    primary = Path(declared) if declared else Path("src", "main", "java")
    if not primary.is_absolute():
        primary = basedir / primary
    roots.append(str(primary))
    scala_root = str(basedir / "src" / "main" / "scala")
    if scala_root not in roots and os.path.isdir(scala_root):
        roots.append(scala_root)
    return roots
