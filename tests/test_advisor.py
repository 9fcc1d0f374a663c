import pytest

from npm_advisor import Advisory, advise, check_range


def test_same_exact_version_has_no_advisory():
    assert advise("foo", "1.2.3", "1.2.3", False) is None


def test_new_major_version():
    assert advise("foo", "2.0.0", "1.5.0", False) == Advisory(
        part="major",
        message='New major version available for module "foo" (2.0.0)',
    )


def test_new_minor_version():
    assert advise("foo", "1.3.0", "1.2.0", False) == Advisory(
        part="minor",
        message='New minor version available for module "foo" (1.3.0)',
    )


def test_new_patch_version():
    result = advise("foo", "1.2.4", "1.2.3")
    assert result is not None
    assert result.part == "patch"
    assert result.message == 'New patch version available for module "foo" (1.2.4)'


def test_major_takes_precedence_over_lower_parts():
    result = advise("foo", "2.0.0", "1.9.9")
    assert result is not None
    assert result.part == "major"


def test_first_exceeded_part_is_reported_even_when_higher_part_is_behind():
    # Parts are checked in order and the first one where stable is greater wins.
    minor = advise("foo", "1.5.0", "2.0.0")
    assert minor is not None
    assert minor.part == "minor"
    assert minor.message == 'New minor version available for module "foo" (1.5.0)'

    patch = advise("foo", "1.2.9", "1.3.0")
    assert patch is not None
    assert patch.part == "patch"


def test_older_stable_in_every_part_has_no_advisory():
    assert advise("foo", "1.0.0", "2.3.4") is None


def test_prerelease_requirement_on_same_release_is_not_reported():
    assert advise("foo", "1.2.3", "1.2.3-beta.1") is None


def test_v_prefixed_requirement_is_exact():
    result = advise("foo", "1.3.0", "v1.2.0")
    assert result is not None
    assert result.part == "minor"


def test_satisfied_range():
    assert advise("foo", "1.2.3", "^1.0.0", False) is None


def test_out_of_range():
    assert advise("foo", "2.0.0", "^1.0.0", False) == Advisory(
        part=None,
        message='Latest version for module "foo" is out of range "^1.0.0"',
    )


def test_pinning_preempts_range_satisfaction():
    assert advise("foo", "1.2.3", "^1.0.0", True) == Advisory(
        part=None,
        message='Version for module "foo" is not pinned',
    )


def test_pinning_does_not_affect_exact_versions():
    assert advise("foo", "1.2.3", "1.2.3", True) is None


def test_unparsable_requirement():
    assert advise("foo", "1.2.3", "git@github.com:x/y", False) == Advisory(
        part=None,
        message='Unparsable semver string for module "foo": "git@github.com:x/y"',
    )


@pytest.mark.parametrize("required", ["latest", "file:../foo", "https://example.com/foo.tgz"])
def test_non_semver_specifiers_are_unparsable(required):
    result = advise("foo", "1.2.3", required)
    assert result is not None
    assert result.part is None
    assert result.message.startswith("Unparsable semver string")


def test_unparsable_latest_version_on_exact_path():
    assert advise("foo", "not-a-version", "1.2.3") == Advisory(
        part=None,
        message='Unparsable latest version for module "foo": "not-a-version"',
    )


def test_unparsable_latest_version_on_range_path():
    result = advise("foo", "garbage", "^1.0.0")
    assert result is not None
    assert result.message == 'Unparsable latest version for module "foo": "garbage"'


def test_unparsable_latest_version_still_reports_unpinned_first():
    result = advise("foo", "garbage", "^1.0.0", True)
    assert result is not None
    assert result.message == 'Version for module "foo" is not pinned'


def test_wildcard_range_is_always_satisfied():
    assert advise("foo", "9.9.9", "*") is None
    assert advise("foo", "9.9.9", "") is None


def test_check_range_directly():
    assert check_range("foo", "1.4.0", ">=1.0.0 <2.0.0") is None
    result = check_range("foo", "2.1.0", ">=1.0.0 <2.0.0")
    assert result is not None
    assert result.message == 'Latest version for module "foo" is out of range ">=1.0.0 <2.0.0"'


def test_repeated_calls_are_equal():
    first = advise("foo", "2.0.0", "^1.0.0")
    second = advise("foo", "2.0.0", "^1.0.0")
    assert first == second
    assert first is not second


def test_advisory_to_dict():
    advisory = advise("foo", "2.0.0", "1.0.0")
    assert advisory is not None
    assert advisory.to_dict() == {
        "part": "major",
        "message": 'New major version available for module "foo" (2.0.0)',
    }


def test_advisory_rejects_unknown_part():
    with pytest.raises(ValueError):
        Advisory(part="build", message="nope")
