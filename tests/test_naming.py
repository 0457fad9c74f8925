"""Unit tests for object type naming and structural deduplication."""

from __future__ import annotations

import unittest

from typeforge.errors import NamingCollisionExhaustedError
from typeforge.inference.inferencer import infer
from typeforge.inference.merger import merge
from typeforge.inference.naming import Namer, name_schema, singularize, to_type_name
from typeforge.inference.nodes import ArrayType, IntType, ObjectType, OptionalType, StringType, UnionType
from typeforge.values import from_python


class NameDerivationTests(unittest.TestCase):
    def test_field_names_become_pascal_case_identifiers(self) -> None:
        self.assertEqual(to_type_name("metadata"), "Metadata")
        self.assertEqual(to_type_name("user_id"), "UserId")
        self.assertEqual(to_type_name("first-name"), "FirstName")
        self.assertEqual(to_type_name("userID"), "UserID")
        self.assertEqual(to_type_name("2fa"), "Field2fa")
        self.assertEqual(to_type_name("__"), "Field")

    def test_singularize_trailing_word(self) -> None:
        self.assertEqual(singularize("Users"), "User")
        self.assertEqual(singularize("Categories"), "Category")
        self.assertEqual(singularize("Addresses"), "Address")
        self.assertEqual(singularize("Boxes"), "Box")
        self.assertEqual(singularize("OrderItems"), "OrderItem")
        self.assertEqual(singularize("Status"), "Status")
        self.assertEqual(singularize("Data"), "Data")


class NamerTests(unittest.TestCase):
    def test_nested_objects_are_named_in_post_order(self) -> None:
        schema = name_schema(infer(from_python({"owner": {"address": {"city": "Oslo"}}, "id": 1})))

        self.assertEqual(schema.names, ["Address", "Owner", "Root"])
        self.assertEqual(schema.root.name, "Root")
        self.assertIs(schema.root.field("owner").type, schema.definition("Owner"))
        self.assertEqual(schema.index_of("Owner"), 1)

    def test_collision_prepends_nearest_enclosing_segment(self) -> None:
        node = infer(from_python({"metadata": {"source": "api"}, "user": {"metadata": {"score": 1}}}))

        schema = name_schema(node)

        self.assertEqual(schema.names, ["Metadata", "UserMetadata", "User", "Root"])
        self.assertEqual(schema.definition("UserMetadata").field_names, ["score"])

    def test_identical_shapes_share_one_definition(self) -> None:
        node = infer(
            from_python(
                {
                    "billing": {"street": "Main St", "zip": "02134"},
                    "shipping": {"zip": "10001", "street": "Side St"},
                }
            )
        )

        schema = name_schema(node)

        self.assertEqual(schema.names, ["Billing", "Root"])
        self.assertIs(schema.root.field("billing").type, schema.root.field("shipping").type)

    def test_field_optionality_is_part_of_the_shape(self) -> None:
        merged = merge(
            infer(from_python({"a": {"x": 1}, "b": {"x": 1}})),
            infer(from_python({"a": {"x": 2}, "b": {}})),
        )

        schema = name_schema(merged)

        self.assertEqual(schema.names, ["A", "B", "Root"])
        self.assertEqual(schema.definition("A").field("x").type, IntType())
        self.assertEqual(schema.definition("B").field("x").type, OptionalType(IntType()))

    def test_array_elements_use_singular_names(self) -> None:
        schema = name_schema(infer(from_python({"users": [{"name": "a"}], "categories": [{"id": 1}]})))
        self.assertEqual(schema.names, ["User", "Category", "Root"])
        self.assertIsInstance(schema.root.field("users").type, ArrayType)
        self.assertEqual(schema.root.field("users").type.element.name, "User")

    def test_root_array_elements_and_custom_root_name(self) -> None:
        schema = name_schema(infer(from_python([{"id": 1}, {"id": 2}])), root_name="order_export")
        self.assertEqual(schema.names, ["OrderExportItem"])
        self.assertEqual(schema.root.element.name, "OrderExportItem")

    def test_root_name_is_reserved_for_the_root_object(self) -> None:
        schema = name_schema(infer(from_python({"root": {"x": 1}})))
        self.assertEqual(schema.names, ["RootRoot", "Root"])

    def test_root_name_is_reserved_when_the_root_is_a_union(self) -> None:
        merged = merge(infer(from_python({"root": {"x": 1}})), infer(from_python("s")))

        schema = name_schema(merged)

        self.assertEqual(schema.names, ["RootRoot", "Root"])
        self.assertIsInstance(schema.root, UnionType)
        self.assertEqual(schema.root.variants[1].name, "Root")

    def test_root_name_is_reserved_for_an_optional_union_root(self) -> None:
        merged = merge(
            merge(infer(from_python({"root": {"x": 1}})), infer(from_python(3))),
            infer(from_python(None)),
        )

        schema = name_schema(merged)

        self.assertEqual(schema.names, ["RootRoot", "Root"])

    def test_joined_path_words_fall_back_to_a_separated_name(self) -> None:
        node = infer(
            from_python({"b": {"y": 1}, "a_b": {"z": 1}, "root_a_b": {"w": 1}, "a": {"b": {"x": 1}}})
        )

        schema = name_schema(node)

        self.assertEqual(schema.names, ["B", "AB", "RootAB", "Root_A_B", "A", "Root"])
        self.assertEqual(schema.definition("Root_A_B").field_names, ["x"])

    def test_scalar_root_has_no_definitions(self) -> None:
        schema = name_schema(StringType())
        self.assertEqual(schema.root, StringType())
        self.assertEqual(schema.definitions, ())

    def test_unresolvable_collision_is_reported(self) -> None:
        node = infer(
            from_python({"user_meta": {"a": 1}, "userMeta": {"b": 1}, "user-meta": {"c": 1}, "UserMeta": {"d": 1}})
        )

        with self.assertRaises(NamingCollisionExhaustedError) as ctx:
            name_schema(node)

        self.assertEqual(ctx.exception.base_name, "UserMeta")

    def test_naming_is_deterministic_and_scoped_per_namer(self) -> None:
        node = infer(from_python({"metadata": {"a": 1}, "user": {"metadata": {"b": 1}}}))

        first = Namer().name(node)
        second = Namer().name(node)

        self.assertEqual(first, second)
        self.assertEqual(first.names, second.names)
        self.assertTrue(all(isinstance(definition, ObjectType) for definition in first.definitions))


if __name__ == "__main__":
    unittest.main()
