import math

from cornermesh.params import BoxSpec, FaceGroup
from cornermesh.texture import TEXEL_SPAN, Material, Texture, WrapMode, configure_material, group_texture

BOX = BoxSpec(2048.0, 512.0, 1024.0)


def test_untextured_material_is_passed_through() -> None:
    material = Material(color=(0.2, 0.4, 0.6))
    assert configure_material(material, BOX) is material


def test_textured_material_yields_three_group_materials() -> None:
    image = object()
    source = Texture(image=image)
    lateral, cap, wall = configure_material(Material(texture=source, name="wood"), BOX)

    for m in (lateral, cap, wall):
        assert m.texture.image is image
        assert m.texture.wrap_s is WrapMode.MIRRORED_REPEAT
        assert m.texture.wrap_t is WrapMode.MIRRORED_REPEAT
        assert m.texture.center == (0.5, 0.5)
        assert m.double_sided and not m.wireframe

    assert lateral.texture.repeat == (2.0, 1.0)   # depth, height
    assert cap.texture.repeat == (2.0, 4.0)       # depth, width
    assert wall.texture.repeat == (1.0, 4.0)      # height, width
    assert lateral.texture.rotation == 0.0
    assert cap.texture.rotation == wall.texture.rotation == -math.pi / 2
    assert [m.name for m in (lateral, cap, wall)] == ["wood_lateral", "wood_cap", "wood_wall"]

    # the source stays as it was
    assert source.wrap_s is WrapMode.CLAMP
    assert source.repeat == (1.0, 1.0)


def test_repeat_keeps_texel_density() -> None:
    small = group_texture(Texture(image=None), FaceGroup.CAP, BoxSpec(512.0, 10.0, 256.0))
    large = group_texture(Texture(image=None), FaceGroup.CAP, BoxSpec(1024.0, 10.0, 512.0))
    assert small.repeat == (256.0 / TEXEL_SPAN, 512.0 / TEXEL_SPAN)
    assert large.repeat == (2 * small.repeat[0], 2 * small.repeat[1])


def test_group_textures_share_centre_pivot() -> None:
    textures = [m.texture for m in configure_material(Material(texture=Texture(image="t.jpg")), BOX)]
    assert all(t.center == (0.5, 0.5) for t in textures)
