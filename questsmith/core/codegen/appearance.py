"""Appearance emitter for the NPC prefab chain."""

from typing import Optional

from questsmith.core.blueprint.models import AppearanceLayer, NpcAppearance
from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.formatting import (
    color32_expression,
    color_expression,
    float_literal,
    format_tuple,
    string_literal,
)

_LAYER_METHODS = (
    ("face_layers", "FaceLayers", "WithFaceLayer"),
    ("body_layers", "BodyLayers", "WithBodyLayer"),
    ("accessory_layers", "AccessoryLayers", "WithAccessoryLayer"),
)


def emit(builder: CodeBuilder, appearance: Optional[NpcAppearance]) -> None:
    """Write ``.WithAppearanceDefaults(av => { ... })``.

    A missing appearance still produces the call with an empty body, since
    the prefab always needs an avatar configuration.
    """
    if appearance is None:
        builder.append_line(".WithAppearanceDefaults(av => { })")
        return

    builder.append_source_comment("Npc.Appearance")
    builder.open_block(".WithAppearanceDefaults(av =>")

    builder.append_source_comment("Appearance.Gender, Height, Weight, SkinColor")
    _assign(builder, "Gender", float_literal(appearance.gender))
    _assign(builder, "Height", float_literal(appearance.height))
    _assign(builder, "Weight", float_literal(appearance.weight))
    _assign(builder, "SkinColor", color32_expression(appearance.skin_color))

    builder.append_source_comment(
        "Appearance.LeftEyeLidColor, RightEyeLidColor, EyeBallTint"
    )
    _assign(builder, "LeftEyeLidColor", color_expression(appearance.left_eye_lid_color))
    _assign(builder, "RightEyeLidColor", color_expression(appearance.right_eye_lid_color))
    _assign(builder, "EyeBallTint", color_expression(appearance.eye_ball_tint))

    builder.append_source_comment("Appearance.HairColor, HairPath")
    _assign(builder, "HairColor", color_expression(appearance.hair_color))
    _assign(builder, "HairPath", string_literal(appearance.hair_path))

    builder.append_source_comment("Appearance.EyeballMaterialIdentifier, PupilDilation")
    _assign(
        builder,
        "EyeballMaterialIdentifier",
        string_literal(appearance.eyeball_material_identifier),
    )
    _assign(builder, "PupilDilation", float_literal(appearance.pupil_dilation))

    builder.append_source_comment(
        "Appearance.EyebrowScale, EyebrowThickness, EyebrowRestingHeight, "
        "EyebrowRestingAngle"
    )
    _assign(builder, "EyebrowScale", float_literal(appearance.eyebrow_scale))
    _assign(builder, "EyebrowThickness", float_literal(appearance.eyebrow_thickness))
    _assign(
        builder, "EyebrowRestingHeight", float_literal(appearance.eyebrow_resting_height)
    )
    _assign(
        builder, "EyebrowRestingAngle", float_literal(appearance.eyebrow_resting_angle)
    )

    builder.append_source_comment("Appearance.LeftEyeTop/Bottom, RightEyeTop/Bottom")
    _assign(
        builder,
        "LeftEye",
        format_tuple(appearance.left_eye_top, appearance.left_eye_bottom),
    )
    _assign(
        builder,
        "RightEye",
        format_tuple(appearance.right_eye_top, appearance.right_eye_bottom),
    )

    for attribute, label, method in _LAYER_METHODS:
        layers: tuple[AppearanceLayer, ...] = getattr(appearance, attribute)
        if layers:
            builder.append_source_comment(f"Appearance.{label}[]")
        for layer in layers:
            builder.append_line(
                f"av.{method}({string_literal(layer.layer_path)}, "
                f"{color_expression(layer.color_hex)});"
            )

    builder.close_block()
    builder.append_line(")")


def _assign(builder: CodeBuilder, member: str, expression: str) -> None:
    builder.append_line(f"av.{member} = {expression};")
