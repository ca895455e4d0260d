from django.test import SimpleTestCase

from django_datatables.exceptions import InvalidArgumentError
from django_datatables.validation import (
    check_keys_value_types_or_fail,
    check_type_or_fail,
    in_choices_or_fail,
    validate_body_or_params,
)


class ValidationTests(SimpleTestCase):
    def test_in_choices(self):
        in_choices_or_fail("a", ["a", "b"], "field")
        in_choices_or_fail(None, ["a"], "field")
        with self.assertRaisesMessage(InvalidArgumentError, "field must be one of 'a', 'b'. Found: 'c'."):
            in_choices_or_fail("c", ["a", "b"], "field")
        with self.assertRaises(InvalidArgumentError):
            in_choices_or_fail(None, ["a"], "field", allow_none=False)

    def test_check_type_refuses_bool_for_int(self):
        check_type_or_fail(3, int, "count")
        check_type_or_fail(True, bool, "flag")
        with self.assertRaisesMessage(InvalidArgumentError, "count must be int. Found: bool."):
            check_type_or_fail(True, int, "count")
        with self.assertRaisesMessage(InvalidArgumentError, "label must be str. Found: None."):
            check_type_or_fail(None, str, "label", allow_none=False)

    def test_keys_value_types_for_mappings_and_sequences(self):
        check_keys_value_types_or_fail({0: 1}, int, int, "order_data")
        check_keys_value_types_or_fail(["asc"], int, str, "order_sequence")
        with self.assertRaisesMessage(InvalidArgumentError, "In order_data keys must be int"):
            check_keys_value_types_or_fail({"0": 1}, int, int, "order_data")
        with self.assertRaisesMessage(InvalidArgumentError, "In order_sequence values must be str"):
            check_keys_value_types_or_fail(["asc", 1], int, str, "order_sequence")
        with self.assertRaisesMessage(InvalidArgumentError, "must be a mapping or a sequence"):
            check_keys_value_types_or_fail("asc", int, str, "order_sequence")

    def test_body_or_params(self):
        validate_body_or_params("return 1;")
        validate_body_or_params({"class_name": "x"})
        with self.assertRaises(InvalidArgumentError):
            validate_body_or_params(["return 1;"])
        with self.assertRaises(InvalidArgumentError):
            validate_body_or_params({("a",): 1})
