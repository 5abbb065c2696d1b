from dataclasses import dataclass
from typing import Annotated, ClassVar, Optional

from pydantic import BaseModel, Field

from postman_gen.generator.examples import classify, describe_type, generate_example
from postman_gen.registry.base import FieldDescriptor, TypeDescriptor


class Address(BaseModel):
    street: str


class UserRequest(BaseModel):
    name: str
    age: int


class Profile(BaseModel):
    nickname: Optional[str] = None
    score: float
    verified: bool
    address: Address
    emails: list[str] = []
    visits: Annotated[int, Field(ge=0)] = 0
    user_name: str = Field("", alias="userName")
    kind: ClassVar[str] = "profile"


class Admin(UserRequest):
    role: str


@dataclass
class Point:
    x: float
    y: float
    label: str | None = None


class TestGenerateExample:
    def test_all_kinds(self):
        td = TypeDescriptor(
            name="Account",
            fields=[
                FieldDescriptor(name="title", kind="text"),
                FieldDescriptor(name="id", kind="long"),
                FieldDescriptor(name="count", kind="integer"),
                FieldDescriptor(name="active", kind="boolean"),
                FieldDescriptor(name="balance", kind="double"),
                FieldDescriptor(name="owner", kind="other"),
            ],
        )
        assert generate_example(td) == {
            "title": "example",
            "id": 0,
            "count": 0,
            "active": False,
            "balance": 0.0,
            "owner": "nestedObject",
        }

    def test_double_is_float(self):
        td = TypeDescriptor(name="T", fields=[FieldDescriptor(name="v", kind="double")])
        assert isinstance(generate_example(td)["v"], float)

    def test_none_type_gives_empty_example(self):
        assert generate_example(None) == {}


class TestDescribeType:
    def test_simple_model(self):
        td = describe_type(UserRequest)
        assert td.name == "UserRequest"
        assert [(f.name, f.kind) for f in td.fields] == [("name", "text"), ("age", "integer")]
        assert generate_example(td) == {"name": "example", "age": 0}

    def test_optional_annotated_and_nested(self):
        kinds = {f.name: f.kind for f in describe_type(Profile).fields}
        assert kinds == {
            "nickname": "text",
            "score": "double",
            "verified": "boolean",
            "address": "other",
            "emails": "other",
            "visits": "integer",
            "user_name": "text",
        }

    def test_field_aliases_are_ignored(self):
        names = [f.name for f in describe_type(Profile).fields]
        assert "user_name" in names
        assert "userName" not in names

    def test_inherited_fields_are_not_walked(self):
        td = describe_type(Admin)
        assert [f.name for f in td.fields] == ["role"]

    def test_dataclass(self):
        kinds = {f.name: f.kind for f in describe_type(Point).fields}
        assert kinds == {"x": "double", "y": "double", "label": "text"}

    def test_non_class_types_have_no_fields(self):
        assert describe_type(dict[str, int]).fields == []
        assert describe_type(int).fields == []
        assert describe_type(list[UserRequest]).fields == []

    def test_optional_model_unwraps(self):
        td = describe_type(Optional[UserRequest])
        assert td.name == "UserRequest"


class TestClassify:
    def test_bool_is_not_integer(self):
        assert classify(bool) == "boolean"
        assert classify(int) == "integer"

    def test_union_of_two_types_is_other(self):
        assert classify(int | str) == "other"

    def test_string_annotations(self):
        assert classify("str") == "text"
        assert classify("Optional[int]") == "integer"
        assert classify("float | None") == "double"
        assert classify("Address") == "other"
