"""
Unit tests for the example ic_ecm templates.
"""

import math

import pytest

from ecm_creator.specs import (
    TEMPLATE_VARIANTS,
    create_ic_ecm_xml_template,
    parse_ecm_file,
    parse_ecm_string,
    template_string,
)
from ecm_creator.specs.patch_spec import PatchKind


class TestTemplateContent:
    """The templates are valid ic_ecm documents."""

    def test_multilayer_structure(self):
        document = parse_ecm_string(template_string("multilayer"))
        assert [layer.layer_id for layer in document.layers] == [1, 2]
        base, top = document.layers
        assert base.collections[0].kind == PatchKind.EVERYWHERE
        assert [c.kind for c in top.collections] == [PatchKind.ELLIPSE, PatchKind.ELLIPTICAL_DISC]
        rings = top.collections[0].patches
        assert rings[0].region.rotation == pytest.approx(math.pi / 8)
        assert rings[1].region.rotation == pytest.approx(-math.pi / 2)
        assert top.n_patches == 4

    def test_monolayer_structure(self):
        document = parse_ecm_string(template_string("monolayer"))
        assert len(document.layers) == 1
        patch = document.layers[0].collections[0].patches[0]
        assert patch.kind == PatchKind.ELLIPSE_WITH_SHELL
        assert patch.region.rotation == pytest.approx(math.radians(30))
        assert patch.exterior is not None

    def test_pretty_printed(self):
        text = template_string()
        assert text.startswith("<?xml")
        assert "\n  <layer" in text

    def test_unknown_variant(self):
        with pytest.raises(ValueError, match="Unknown template variant"):
            template_string("trilayer")


class TestCreateTemplate:
    """Tests for create_ic_ecm_xml_template."""

    @pytest.mark.parametrize("variant", TEMPLATE_VARIANTS)
    def test_writes_into_new_nested_folder(self, tmp_path, variant):
        folder = tmp_path / "config" / "ecm"
        path = create_ic_ecm_xml_template(folder, variant=variant)
        assert path == folder / "ecm.xml"
        assert path.exists()
        assert parse_ecm_file(path).layers

    def test_overwrites_existing_file(self, tmp_path):
        (tmp_path / "ecm.xml").write_text("stale")
        path = create_ic_ecm_xml_template(str(tmp_path))
        assert "ic_ecm" in path.read_text()
