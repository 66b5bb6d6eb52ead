"""Unit tests for the resources exporter."""

from Bundlesmith.models.project import Project, Resource, ResourceKind
from Bundlesmith.services.resources import ResourcesExporter


class TestResourcesExporter:
    """Tests for resource copying and path rewriting."""

    def test_copy_and_rewrite(self, sample_project, temp_dir, file_system):
        """Test that resource files are copied and their paths rewritten."""
        export_dir = temp_dir / "export"

        warnings = ResourcesExporter(file_system).copy_all_resources_to(sample_project, str(export_dir))

        assert warnings == []
        assert (export_dir / "player.png").read_bytes() == b"\x89PNG"
        assert sample_project.get_resource("player").file == "player.png"

    def test_same_file_name_from_two_directories(self, temp_dir, file_system):
        """Test that two sources with the same file name get distinct copies."""
        project_dir = temp_dir / "project"
        (project_dir / "a").mkdir(parents=True)
        (project_dir / "b").mkdir()
        (project_dir / "a" / "hero.png").write_bytes(b"a")
        (project_dir / "b" / "hero.png").write_bytes(b"b")
        project = Project(
            project_file=str(project_dir / "game.json"),
            resources=[
                Resource(name="heroA", file="a/hero.png"),
                Resource(name="heroB", file="b/hero.png"),
                Resource(name="heroA2", file="a/hero.png"),
            ],
        )
        export_dir = temp_dir / "export"

        ResourcesExporter(file_system).copy_all_resources_to(project, str(export_dir))

        assert project.get_resource("heroA").file == "hero.png"
        assert project.get_resource("heroB").file == "hero2.png"
        assert project.get_resource("heroA2").file == "hero.png"
        assert (export_dir / "hero2.png").read_bytes() == b"b"

    def test_missing_file_is_a_warning(self, temp_dir, file_system):
        project = Project(
            project_file=str(temp_dir / "game.json"),
            resources=[
                Resource(name="gone", file="gone.png"),
                Resource(name="remote", file="https://example.com/remote.png"),
            ],
        )

        warnings = ResourcesExporter(file_system).copy_all_resources_to(project, str(temp_dir / "export"))

        assert len(warnings) == 1
        assert "gone" in warnings[0]
        assert project.get_resource("gone").file == "gone.png"
        assert project.get_resource("remote").file == "https://example.com/remote.png"

    def test_deprecated_font_files(self, temp_dir, file_system):
        """Test that bare font files in the export become font resources.

        Verifies that existing resources with the same name are kept as is,
        and that font files in subdirectories are left alone.
        """
        export_dir = temp_dir / "export"
        (export_dir / "fonts").mkdir(parents=True)
        (export_dir / "Roboto.ttf").write_bytes(b"")
        (export_dir / "Mono.ttf").write_bytes(b"")
        (export_dir / "fonts" / "Nested.ttf").write_bytes(b"")
        project = Project(resources=[Resource(name="Roboto.ttf", kind=ResourceKind.FONT, file="Roboto.ttf")])

        added = ResourcesExporter(file_system).add_deprecated_font_files_to_font_resources(
            project, str(export_dir)
        )

        assert added == ["Mono.ttf"]
        font = project.get_resource("Mono.ttf")
        assert font.kind is ResourceKind.FONT
        assert font.file == "Mono.ttf"
        assert not font.user_added
        assert project.get_resource("fonts/Nested.ttf") is None
        assert len(project.resources) == 2
