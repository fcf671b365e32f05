"""Tests for loading MavenProject from pom.xml."""

import xml.etree.ElementTree as ET

import pytest

from project.pom import interpolate, load_project

POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <parent>
    <groupId>com.example</groupId>
    <artifactId>parent</artifactId>
    <version>1.0.0</version>
  </parent>
  <artifactId>app</artifactId>
  <properties>
    <scala.version>2.13.9</scala.version>
    <scala.binary>2.13</scala.binary>
    <!-- comment -->
    <scoverage.skip>false</scoverage.skip>
  </properties>
  <dependencyManagement>
    <dependencies>
      <dependency>
        <groupId>org.scala-lang</groupId>
        <artifactId>scala-library</artifactId>
        <version>2.12.0</version>
      </dependency>
    </dependencies>
  </dependencyManagement>
  <dependencies>
    <dependency>
      <groupId>org.scala-lang</groupId>
      <artifactId>scala-library</artifactId>
      <version>${scala.version}</version>
    </dependency>
    <dependency>
      <groupId>org.scalatest</groupId>
      <artifactId>scalatest_${scala.binary}</artifactId>
      <version>3.2.15</version>
      <scope>test</scope>
    </dependency>
  </dependencies>
  <build>
    <finalName>${project.artifactId}-custom</finalName>
    <sourceDirectory>src/main/scala</sourceDirectory>
  </build>
</project>
"""


@pytest.fixture
def pom_file(tmp_path):
    path = tmp_path / "pom.xml"
    path.write_text(POM, encoding="utf-8")
    return path


class TestLoadProject:
    """pom.xml parsing."""

    def test_coordinates_inherit_from_parent(self, pom_file):
        project = load_project(str(pom_file))
        assert (project.group_id, project.artifact_id, project.version) == ("com.example", "app", "1.0.0")
        assert project.packaging == "jar"

    def test_direct_dependencies_only(self, pom_file):
        project = load_project(str(pom_file))
        assert [(d.artifact_id, d.version, d.scope) for d in project.dependencies] == [
            ("scala-library", "2.13.9", "compile"),
            ("scalatest_2.13", "3.2.15", "test"),
        ]

    def test_properties(self, pom_file):
        project = load_project(str(pom_file))
        assert project.properties.get("scala.version") == "2.13.9"
        assert project.properties.get("scoverage.skip") == "false"
        assert len(project.properties) == 3

    def test_build_section(self, pom_file, tmp_path):
        project = load_project(str(pom_file))
        assert project.final_name == "app-custom"
        assert project.build_directory == tmp_path / "target"
        assert project.compile_source_roots == [str(tmp_path / "src" / "main" / "scala")]

    def test_directory_argument(self, pom_file, tmp_path):
        assert load_project(str(tmp_path)).artifact_id == "app"

    def test_defaults_without_namespace(self, tmp_path):
        (tmp_path / "src" / "main" / "scala").mkdir(parents=True)
        (tmp_path / "pom.xml").write_text(
            "<project><groupId>g</groupId><artifactId>a</artifactId>"
            "<version>2</version><packaging>pom</packaging></project>",
            encoding="utf-8",
        )
        project = load_project(str(tmp_path / "pom.xml"))
        assert project.packaging == "pom"
        assert project.final_name == "a-2"
        assert project.compile_source_roots == [
            str(tmp_path / "src" / "main" / "java"),
            str(tmp_path / "src" / "main" / "scala"),
        ]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_project(str(tmp_path / "pom.xml"))

    def test_malformed_file(self, tmp_path):
        (tmp_path / "pom.xml").write_text("<project>", encoding="utf-8")
        with pytest.raises(ET.ParseError):
            load_project(str(tmp_path / "pom.xml"))


def test_interpolate_leaves_unknown_references():
    assert interpolate("${a}-${b}", {"a": "1"}) == "1-${b}"
    assert interpolate(None, {}) is None
