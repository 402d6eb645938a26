"""Tests for RowHandle, RowEnum and ObjectPointer."""

import pytest

from icarus_tables.values import ASSET_EXTENSION, ObjectPointer, RowEnum, RowHandle


class TestRowHandle:
    def test_parse(self):
        handle = RowHandle.parse('(RowName="Foo",DataTableName="D_Bar")')
        assert handle.row_name == "Foo"
        assert handle.data_table_name == "D_Bar"
        assert handle.is_set

    def test_parse_is_stable(self):
        text = '(RowName="Foo",DataTableName="D_Bar")'
        assert RowHandle.parse(text) == RowHandle.parse(text)

    def test_parse_ignores_unknown_keys(self):
        handle = RowHandle.parse('(Other=1,RowName="Foo")')
        assert handle == RowHandle(row_name="Foo")
        assert not handle.is_set

    def test_parse_malformed_yields_unset(self):
        handle = RowHandle.parse('(RowName="Foo')
        assert handle == RowHandle()
        assert str(handle) == "None"

    def test_from_json_object(self):
        handle = RowHandle.from_json({"RowName": "Wood", "DataTableName": "D_ItemsStatic"})
        assert handle == RowHandle("Wood", "D_ItemsStatic")

    def test_from_json_string(self):
        handle = RowHandle.from_json('(RowName="Wood",DataTableName="D_ItemsStatic")')
        assert handle == RowHandle("Wood", "D_ItemsStatic")

    def test_from_json_rejects_other_types(self):
        with pytest.raises(TypeError):
            RowHandle.from_json(5)

    def test_str_is_row_name(self):
        assert str(RowHandle("Wood", "D_ItemsStatic")) == "Wood"

    def test_invalid_sentinel(self):
        assert RowHandle.INVALID.row_name == "Invalid"
        assert RowHandle.INVALID.data_table_name == "Invalid"

    def test_hashable(self):
        assert len({RowHandle("A", "T"), RowHandle("A", "T")}) == 1


class TestRowEnum:
    def test_parse(self):
        assert RowEnum.parse('(Value="Stamina")').value == "Stamina"

    def test_from_json(self):
        assert RowEnum.from_json({"Value": "Health"}) == RowEnum("Health")
        assert RowEnum.from_json("(Value=Health)") == RowEnum("Health")

    def test_from_json_rejects_other_types(self):
        with pytest.raises(TypeError):
            RowEnum.from_json(["Health"])

    def test_str(self):
        assert str(RowEnum("Health")) == "Health"
        assert str(RowEnum()) == "None"


class TestObjectPointer:
    def test_soft_pointer(self):
        pointer = ObjectPointer("/Game/Foo/Bar.Bar")
        assert pointer.type_name is None
        assert pointer.path == "/Game/Foo/Bar.Bar"
        assert not pointer.is_hard

    def test_hard_pointer(self):
        pointer = ObjectPointer("Texture2D'/Game/UI/Icon.Icon'")
        assert pointer.type_name == "Texture2D"
        assert pointer.path == "/Game/UI/Icon.Icon"
        assert pointer.is_hard

    def test_quoted_path_without_type(self):
        pointer = ObjectPointer("'/Game/UI/Icon.Icon'")
        assert pointer.type_name is None
        assert pointer.path == "/Game/UI/Icon.Icon"

    def test_unrecognized_form_keeps_raw_only(self):
        pointer = ObjectPointer("A'B'C'D")
        assert pointer.type_name is None
        assert pointer.path is None
        assert pointer.get_asset_path() is None
        assert str(pointer) == "A'B'C'D"

    def test_surrounding_whitespace_trimmed(self):
        assert ObjectPointer("  /Game/X.X ").raw == "/Game/X.X"

    def test_game_asset_path(self):
        path = ObjectPointer("/Game/Foo/Bar.Bar").get_asset_path()
        assert path == "Icarus/Content/Foo/Bar"

    def test_game_asset_path_with_extension(self):
        path = ObjectPointer("Texture2D'/Game/Foo/Bar.Bar'").get_asset_path(ASSET_EXTENSION)
        assert path == "Icarus/Content/Foo/Bar.uasset"

    def test_script_path_unchanged(self):
        pointer = ObjectPointer("/Script/Engine.Something")
        assert pointer.get_asset_path() == "/Script/Engine.Something"
        assert pointer.get_asset_path(ASSET_EXTENSION) == "/Script/Engine.Something"

    def test_none_path_unchanged(self):
        pointer = ObjectPointer("None")
        assert pointer.is_none
        assert pointer.get_asset_path() == "None"

    def test_dot_in_directory_not_stripped(self):
        assert ObjectPointer("/Game/v1.2/Asset").get_asset_path() == "Icarus/Content/v1.2/Asset"

    def test_other_mount_points_kept(self):
        assert ObjectPointer("/Plugin/Foo.Foo").get_asset_path() == "/Plugin/Foo"

    def test_equality_uses_raw_text(self):
        assert ObjectPointer("/Game/A.A") == ObjectPointer("/Game/A.A")
        assert ObjectPointer("/Game/A.A") != ObjectPointer("Class'/Game/A.A'")

    def test_ordering(self):
        pointers = sorted([ObjectPointer("/Game/B"), ObjectPointer("/Game/A")])
        assert [str(p) for p in pointers] == ["/Game/A", "/Game/B"]

    def test_from_json(self):
        assert ObjectPointer.from_json("/Game/A.A") == ObjectPointer("/Game/A.A")
        with pytest.raises(TypeError):
            ObjectPointer.from_json({"Path": "/Game/A.A"})
