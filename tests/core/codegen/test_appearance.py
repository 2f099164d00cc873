"""Appearance emission tests"""

from questsmith.core.blueprint.models import AppearanceLayer, NpcAppearance
from questsmith.core.codegen import appearance
from questsmith.core.codegen.code_builder import CodeBuilder


def _render(value) -> str:
    builder = CodeBuilder()
    appearance.emit(builder, value)
    return builder.build()


class TestAppearance:
    def test_missing_appearance_writes_empty_call(self):
        assert _render(None) == ".WithAppearanceDefaults(av => { })\n"

    def test_defaults(self):
        source = _render(NpcAppearance())
        assert "av.Gender = 0.5f;" in source
        assert "av.SkinColor = new Color32(211, 181, 143, 255);" in source
        assert "av.HairColor = new Color(0.176f, 0.125f, 0.075f);" in source
        assert 'av.HairPath = "Avatar/Hair/Spiky/Spiky";' in source
        assert "av.LeftEye = (0.5f, 0.5f);" in source

    def test_layers(self):
        value = NpcAppearance(
            face_layers=(AppearanceLayer("Avatar/Layers/Face/Freckles", "#80FF0000"),),
            accessory_layers=(AppearanceLayer("Avatar/Accessories/Cap", "#FFFFFFFF"),),
        )
        source = _render(value)
        assert (
            'av.WithFaceLayer("Avatar/Layers/Face/Freckles", '
            "new Color(1f, 0f, 0f, 0.502f));"
        ) in source
        assert 'av.WithAccessoryLayer("Avatar/Accessories/Cap", new Color(1f, 1f, 1f));' in source
        assert "WithBodyLayer" not in source

    def test_block_closes_with_paren(self):
        lines = _render(NpcAppearance()).splitlines()
        assert lines[-2:] == ["}", ")"]
