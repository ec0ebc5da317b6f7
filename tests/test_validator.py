import pytest

from formvalidator import (
    AlphaNumeric,
    Boolean,
    ConfigurationError,
    CountryCode,
    CreditCard,
    CSVEntryStrLen,
    CurrencyCode,
    DEFAULT_MESSAGES,
    Email,
    FloatRange,
    FormError,
    FormValidator,
    InListMultiple,
    InListSingle,
    IntRange,
    ISBN,
    IsDate,
    IsDateTime,
    IsFloat,
    IsJSON,
    IsTime,
    IsUUID,
    Latitude,
    Longitude,
    NotCommonPassword,
    NotInListSingle,
    Numeric,
    Required,
    RequiredMultiple,
    StrLen,
    StrMatch,
    UTF8LetterNum,
    WebRequestURI,
    rule_chain,
)

ANIMALS = ["dogs", "cats", "hamsters", "lizards", "birds", "fish"]
COLORS = ["blue", "green", "red", "yellow", "purple", "white", "black", "brown", "orange"]


@pytest.fixture
def signup_form():
    return {
        "FirstName": ["Henry"],
        "LastName": ["Smith"],
        "Username": ["hensmith55"],
        "Email": ["henrysmith@website.com"],
        "Password": ["I am Great!"],
        "ConfirmPassword": ["I am Great!"],
        "Age": ["55"],
        "Amount": ["22.50"],
        "CreditCard": ["4716461583322103"],
        "Latitude": ["45.3941"],
        "Longitude": ["134.03843"],
        "Website": ["https://henrysmithisgreat.com/"],
        "Date": ["17-09-1974"],
        "Time": ["03:37:19"],
        "DateTime": ["29-04-1784 07:19:55"],
        "Slug": ["Test123%"],
        "DelimiterList": [",,,,one,two,three,,,,,four,five,,,,"],
        "AgreeToTerms": ["true"],
        "Country": ["gb"],
        "FavoriteColors": ["orange", "black"],
        "FavoriteAnimal": ["dogs"],
        "LeastFavoriteAnimal": ["mosquitoes"],
        "Currency": ["usd"],
        "ISBN": ["3 401 01319 X"],
        "UUID4": ["57b73598-8764-4ad0-a76a-679bb6640eb1"],
        "JSON": ['{"ID":1,"Name":"Reds","Colors":["Crimson","Red","Ruby","Maroon"]}'],
    }


@pytest.fixture
def signup_rules(signup_form, references):
    return {
        "FirstName": rule_chain(Required(), AlphaNumeric(), StrLen(2, 50)),
        "LastName": rule_chain(Required(), AlphaNumeric(), StrLen(4, 50)),
        "Username": rule_chain(Required(), UTF8LetterNum(), StrLen(2, 30)),
        "Email": rule_chain(Required(), Email(allow_disposable_domains=False, references=references), StrLen(6, 50)),
        "Password": rule_chain(Required(), StrMatch(signup_form["ConfirmPassword"][0]), StrLen(8, 500),
            NotCommonPassword(references)),
        "ConfirmPassword": rule_chain(Required()),
        "Age": rule_chain(Numeric(), IntRange(18, 100)),
        "Amount": rule_chain(Required(), IsFloat(), FloatRange(0.01, 100.0)),
        "CreditCard": rule_chain(Required(), CreditCard(False)),
        "Latitude": rule_chain(Required(), Latitude()),
        "Longitude": rule_chain(Required(), Longitude()),
        "Website": rule_chain(WebRequestURI()),
        "Date": rule_chain(IsDate()),
        "Time": rule_chain(IsTime()),
        "DateTime": rule_chain(IsDateTime()),
        "DelimiterList": rule_chain(CSVEntryStrLen(",", 2, 5)),
        "AgreeToTerms": rule_chain(Required(), Boolean()),
        "Country": rule_chain(Required(), CountryCode(references)),
        "FavoriteColors": rule_chain(RequiredMultiple(), InListMultiple(COLORS)),
        "FavoriteAnimal": rule_chain(Required(), InListSingle(ANIMALS)),
        "LeastFavoriteAnimal": rule_chain(NotInListSingle(ANIMALS)),
        "Currency": rule_chain(CurrencyCode(references)),
        "ISBN": rule_chain(ISBN()),
        "UUID4": rule_chain(IsUUID(4)),
        "JSON": rule_chain(IsJSON()),
    }


def test_valid_form(signup_rules, signup_form):
    report = FormValidator(signup_rules).validate(signup_form)

    assert report.is_valid
    assert set(report.errors) == set(signup_rules)
    assert all(errors == [] for errors in report.errors.values())
    assert report.failed_fields == []


def test_invalid_fields_collect_every_failure(signup_rules, signup_form):
    signup_form["FirstName"] = [""]
    signup_form["LastName"] = ["!@#"]

    report = FormValidator(signup_rules).validate(signup_form)

    assert not report.is_valid
    assert report.failed_fields == ["FirstName", "LastName"]
    assert [e.kind for e in report.errors["FirstName"]] == ["required"]
    assert [e.kind for e in report.errors["LastName"]] == ["alpha_num", "string_min"]
    assert report.errors["LastName"][1] == FormError(DEFAULT_MESSAGES["string_min"], (4,), "string_min")
    assert report.messages()["LastName"] == [
        "This field may only contain letters and numbers.",
        "This field must be at least 4 characters long.",
    ]


def test_failure_count_matches_failing_rules(messages):
    chain = rule_chain(AlphaNumeric(), Numeric(), Boolean(), StrLen(5, 10), IsUUID())
    validator = FormValidator({"Code": chain})

    errors = validator.validate({"Code": ["ab!"]}).errors["Code"]

    expected = [rule for rule in chain if not rule.validate(["ab!"], messages).is_valid]
    assert len(errors) == len(expected) == 5


def test_composite_range_reports_one_failure():
    validator = FormValidator({"Code": rule_chain(StrLen(10, 2))})
    assert len(validator.validate({"Code": ["abcde"]}).errors["Code"]) == 1


def test_rule_order_is_kept():
    validator = FormValidator({"Name": rule_chain(StrLen(5, 10), AlphaNumeric(), Numeric())})
    errors = validator.validate({"Name": ["a!"]}).errors["Name"]
    assert [e.kind for e in errors] == ["string_min", "alpha_num", "numeric"]


def test_missing_field_is_an_empty_sequence():
    validator = FormValidator({"Nickname": rule_chain(Required()), "Age": rule_chain(Numeric())})
    report = validator.validate({})

    assert [e.kind for e in report.errors["Nickname"]] == ["required"]
    assert report.errors["Age"] == []


def test_field_names_are_case_sensitive():
    validator = FormValidator({"email": rule_chain(Required())})
    report = validator.validate({"Email": ["joe@example.com"]})
    assert [e.kind for e in report.errors["email"]] == ["required"]


def test_bare_string_values_are_accepted():
    validator = FormValidator({"Age": rule_chain(Numeric(), IntRange(18, 100))})
    assert validator.validate({"Age": "55"}).is_valid


def test_oversized_input_does_not_abort_the_pass():
    validator = FormValidator({
        "Age": rule_chain(Numeric(), IntRange(18, 100)),
        "Name": rule_chain(Required()),
    })

    report = validator.validate({"Age": ["1" * 5000], "Name": [""]})

    assert [e.kind for e in report.errors["Age"]] == ["int_range"]
    assert [e.kind for e in report.errors["Name"]] == ["required"]


def test_undeclared_fields_are_ignored():
    validator = FormValidator({"Age": rule_chain(Numeric())})
    report = validator.validate({"Age": ["5"], "Other": ["!!"]})
    assert report.is_valid
    assert set(report.errors) == {"Age"}


# ============================================================================
# Blank on error
# ============================================================================

def test_blank_on_error_blanks_failed_fields_in_place(signup_rules, signup_form):
    signup_form["LastName"] = ["!@#"]
    signup_form["FavoriteColors"] = ["red", "red"]

    report = FormValidator(signup_rules, blank_on_error=True).validate(signup_form)

    assert report.form is signup_form
    assert signup_form["LastName"] == [""]
    assert signup_form["FavoriteColors"] == [""]
    assert signup_form["FirstName"] == ["Henry"]


def test_blank_on_error_disabled_keeps_values(signup_rules, signup_form):
    signup_form["LastName"] = ["!@#"]
    validator = FormValidator(signup_rules)
    validator.blank_on_error = False

    report = validator.validate(signup_form)

    assert not report.is_valid
    assert signup_form["LastName"] == ["!@#"]


def test_validate_on_copy_leaves_caller_form_untouched(signup_rules, signup_form):
    signup_form["LastName"] = ["!@#"]

    report = FormValidator(signup_rules, blank_on_error=True).validate(signup_form, in_place=False)

    assert signup_form["LastName"] == ["!@#"]
    assert report.form is not signup_form
    assert report.form["LastName"] == [""]
    assert report.form["FirstName"] == ["Henry"]


def test_blank_on_error_defaults_from_settings():
    assert FormValidator({}).blank_on_error is True


def test_blanked_form_revalidates_as_blank():
    validator = FormValidator({"Age": rule_chain(Numeric())}, blank_on_error=True)
    form = {"Age": ["abc"]}
    assert not validator.validate(form).is_valid
    assert validator.validate(form).is_valid


# ============================================================================
# Messages and configuration
# ============================================================================

def test_custom_messages(signup_rules, signup_form):
    signup_form["FirstName"] = [""]
    signup_form["LastName"] = ["!@#"]
    validator = FormValidator(signup_rules)
    validator.set_messages({"required": "What do you know Joe?", "alpha_num": "Crazy man!"})

    report = validator.validate(signup_form)

    assert report.messages()["FirstName"] == ["What do you know Joe?"]
    # string_min is missing from the custom catalog: empty template, arguments kept
    assert report.messages()["LastName"] == ["Crazy man!", ""]
    assert report.errors["LastName"][1].args == (4,)


def test_messages_passed_at_construction():
    validator = FormValidator({"Name": rule_chain(Required())}, messages={"required": "Pflichtfeld"})
    assert validator.validate({}).messages() == {"Name": ["Pflichtfeld"]}
    assert validator.get_error_message("alpha_num") == ""


def test_get_error_message():
    validator = FormValidator({})
    assert validator.get_error_message("required") == "This field is required."
    assert validator.get_error_message("no_such_kind") == ""


def test_nil_configuration_is_rejected():
    with pytest.raises(ConfigurationError):
        FormValidator(None)
    with pytest.raises(ConfigurationError):
        FormValidator({"Name": None})
    with pytest.raises(ConfigurationError):
        FormValidator({}).set_messages(None)


def test_rule_chain_rejects_non_rules():
    with pytest.raises(ConfigurationError) as exc:
        rule_chain(Required(), "not a rule")
    assert exc.value.metadata["position"] == 1


def test_rules_are_fixed_after_construction():
    rules = {"Name": [Required()]}
    validator = FormValidator(rules)
    rules["Name"].append(Numeric())
    rules["Other"] = [Required()]

    assert set(validator.rules) == {"Name"}
    assert len(validator.rules["Name"]) == 1


def test_report_to_dict(signup_rules, signup_form):
    signup_form["Age"] = ["17"]
    report = FormValidator(signup_rules).validate(signup_form)

    payload = report.to_dict()

    assert payload["valid"] is False
    assert payload["errors"]["Age"] == [{
        "kind": "int_range",
        "template": "This field must be between %d - %d.",
        "args": [18, 100],
        "message": "This field must be between 18 - 100.",
    }]
    assert payload["errors"]["FirstName"] == []
