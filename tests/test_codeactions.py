from tflsp.codeactions import (
    REFACTOR_REWRITE,
    SUPPORTED_CODE_ACTIONS,
    CodeActions,
    LanguageID,
)


def test_supported_actions_list():
    assert SUPPORTED_CODE_ACTIONS.as_list() == ["refactor.rewrite"]


def test_as_list_is_sorted():
    actions = CodeActions({"source.b": True, "quickfix": False, "refactor.rewrite": True})
    result = actions.as_list()
    assert result == sorted(result)
    assert set(result) == set(actions)


def test_only_filters_to_requested():
    actions = CodeActions({REFACTOR_REWRITE: True, "quickfix": False})
    wanted = actions.only([REFACTOR_REWRITE, "source.unknown"])
    assert wanted == {REFACTOR_REWRITE: True}
    assert isinstance(wanted, CodeActions)
    assert actions.only([]) == {}


def test_language_id_strings():
    assert str(LanguageID.TERRAFORM) == "terraform"
    assert str(LanguageID.TFVARS) == "terraform-vars"
    assert LanguageID("terraform-vars") is LanguageID.TFVARS