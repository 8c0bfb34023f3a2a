import pytest

from domain.common.exceptions import InvalidPersonNameException
from domain.person.entity import Person
from shared.codes import BusinessCode


@pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
def test_blank_names_rejected(name):
    with pytest.raises(InvalidPersonNameException) as ei:
        Person(id=None, name=name)
    assert ei.value.code == BusinessCode.PARAM_VALIDATION_ERROR
    assert ei.value.field == "name"


def test_name_kept_verbatim():
    p = Person(id=None, name="  Alice ")
    assert p.name == "  Alice "
