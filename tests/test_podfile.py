"""Tests for Podfile parsing."""

import pytest

from podkeeper.core.exceptions import ParsingError
from podkeeper.podfile import Dependency, Platform, Podfile

from tests.conftest import create_test_file


DSL_PODFILE = """\
source 'https://github.com/CocoaPods/Specs.git'
platform :ios, '6.0'

# Networking
target 'App' do
  pod 'AFNetworking', '~> 1.0'
  pod 'RestKit/Core', '>= 0.20', '< 0.21'
  pod 'JSONKit', :git => 'https://github.com/johnezang/JSONKit.git'
end

post_install do |installer|
  installer.pods_project.targets.each do |target|
    if target.name == 'Ignored'
      pod 'Ignored'
    end
  end
end
"""

YAML_PODFILE = """\
platform:
  ios: '6.0'
sources:
  - https://github.com/CocoaPods/Specs.git
dependencies:
  - AFNetworking (~> 1.0)
  - JSONKit
  - RestKit: ['~> 0.20']
"""


class TestDependency:
    """The ``Name (requirements)`` notation."""

    def test_name_only(self):
        assert Dependency.from_string("JSONKit") == Dependency("JSONKit")

    def test_with_requirements(self):
        dependency = Dependency.from_string("RestKit (>= 0.20, < 0.21)")
        assert dependency.name == "RestKit"
        assert dependency.requirements == (">= 0.20", "< 0.21")
        assert str(dependency) == "RestKit (>= 0.20, < 0.21)"

    def test_invalid(self):
        with pytest.raises(ValueError):
            Dependency.from_string("")


class TestDslPodfile:
    """The declarative Podfile form."""

    def test_parses_declarations(self, tmp_path):
        podfile = Podfile.from_file(create_test_file(tmp_path, "Podfile", DSL_PODFILE))

        assert podfile.platform == Platform("ios", "6.0")
        assert podfile.sources == ("https://github.com/CocoaPods/Specs.git",)
        assert podfile.targets == ("App",)
        assert podfile.dependency_names() == ["AFNetworking", "RestKit/Core", "JSONKit"]

    def test_requirements_and_options(self, tmp_path):
        podfile = Podfile.from_file(create_test_file(tmp_path, "Podfile", DSL_PODFILE))
        by_name = {dependency.name: dependency for dependency in podfile.dependencies}

        assert by_name["AFNetworking"].requirements == ("~> 1.0",)
        assert by_name["RestKit/Core"].requirements == (">= 0.20", "< 0.21")
        assert by_name["JSONKit"].requirements == ()
        assert by_name["JSONKit"].options == {"git": "https://github.com/johnezang/JSONKit.git"}

    def test_platform_without_version(self, tmp_path):
        podfile = Podfile.from_file(create_test_file(tmp_path, "Podfile", "platform :osx\n"))
        assert podfile.platform == Platform("osx")
        assert str(podfile.platform) == "osx"

    def test_new_style_options(self, tmp_path):
        podfile = Podfile.from_file(
            create_test_file(tmp_path, "Podfile", "pod 'Local', path: '../Local'\n")
        )
        assert podfile.dependencies[0].options == {"path": "../Local"}

    def test_empty_file(self, tmp_path):
        podfile = Podfile.from_file(create_test_file(tmp_path, "CocoaPods.podfile", ""))
        assert podfile.dependencies == ()
        assert podfile.platform is None

    def test_comment_after_end(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile", "target 'App' do\n  pod 'JSONKit'\nend # App\n")
        podfile = Podfile.from_file(path)
        assert podfile.targets == ("App",)
        assert podfile.dependency_names() == ["JSONKit"]

    def test_comment_after_do(self, tmp_path):
        path = create_test_file(
            tmp_path, "Podfile", "target 'App' do # main target\n  pod 'JSONKit' # JSON\nend\n"
        )
        podfile = Podfile.from_file(path)
        assert podfile.targets == ("App",)
        assert podfile.dependencies == (Dependency("JSONKit"),)

    def test_hash_inside_quotes_is_kept(self, tmp_path):
        path = create_test_file(
            tmp_path, "Podfile", "pod 'Fork', :git => 'https://example.com/fork.git#main' # pinned\n"
        )
        podfile = Podfile.from_file(path)
        assert podfile.dependencies[0].options == {"git": "https://example.com/fork.git#main"}

    def test_one_line_block(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile", "def helper; end\npod 'JSONKit'\n")
        podfile = Podfile.from_file(path)
        assert podfile.dependency_names() == ["JSONKit"]

    def test_missing_end(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile", "target 'App' do\n  pod 'JSONKit'\n")
        with pytest.raises(ParsingError, match="Missing 'end'"):
            Podfile.from_file(path)

    def test_unexpected_end(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile", "pod 'JSONKit'\nend\n")
        with pytest.raises(ParsingError, match="line 2"):
            Podfile.from_file(path)

    def test_pod_without_name(self, tmp_path):
        path = create_test_file(tmp_path, "Podfile", "pod :JSONKit\n")
        with pytest.raises(ParsingError):
            Podfile.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParsingError):
            Podfile.from_file(tmp_path / "Podfile")


class TestYamlPodfile:
    """The ``CocoaPods.podfile.yaml`` form."""

    def test_parses_mapping(self, tmp_path):
        podfile = Podfile.from_file(create_test_file(tmp_path, "CocoaPods.podfile.yaml", YAML_PODFILE))

        assert podfile.platform == Platform("ios", "6.0")
        assert podfile.sources == ("https://github.com/CocoaPods/Specs.git",)
        assert podfile.dependencies == (
            Dependency("AFNetworking", ("~> 1.0",)),
            Dependency("JSONKit"),
            Dependency("RestKit", ("~> 0.20",)),
        )

    def test_platform_name_only(self, tmp_path):
        path = create_test_file(tmp_path, "CocoaPods.podfile.yaml", "platform: osx\n")
        assert Podfile.from_file(path).platform == Platform("osx")

    def test_malformed_yaml(self, tmp_path):
        path = create_test_file(tmp_path, "CocoaPods.podfile.yaml", "dependencies: [unclosed\n")
        with pytest.raises(ParsingError):
            Podfile.from_file(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = create_test_file(tmp_path, "CocoaPods.podfile.yaml", "- JSONKit\n")
        with pytest.raises(ParsingError, match="mapping"):
            Podfile.from_file(path)

    def test_dependencies_must_be_list(self, tmp_path):
        path = create_test_file(tmp_path, "CocoaPods.podfile.yaml", "dependencies: JSONKit\n")
        with pytest.raises(ParsingError):
            Podfile.from_file(path)
