"""Tests for the pure build-setting patcher (xbar.core.patcher)."""
from xbar.core.patcher import patch_settings
from xbar.core.rules import (
    BETA_CARTHAGE_RULES,
    EXCLUDE_ARCHITECTURES,
    PIN_DEPLOYMENT_TARGET,
    REMOVE_VALID_ARCH_TOKENS,
    STRIP_VALID_ARCHS,
    XCODE12_RULES,
    PatchContext,
)


def test_remove_valid_arch_token() -> None:
    """VALID_ARCHS 'armv7 arm64 ' with armv7 targeted becomes 'arm64 ' and is reported as a change."""
    ctx = PatchContext(architectures=("armv7",))
    result = patch_settings({"VALID_ARCHS": "armv7 arm64 "}, [REMOVE_VALID_ARCH_TOKENS], ctx)
    assert result.settings["VALID_ARCHS"] == "arm64 "
    assert result.changed is True
    assert result.changes[0].rule == "remove-valid-arch-tokens"
    assert result.changes[0].old == "armv7 arm64 "


def test_remove_valid_arch_token_repeated_is_idempotent() -> None:
    """A repeated 'armv7 ' token is removed in one pass, so a second pass changes nothing."""
    ctx = PatchContext(architectures=("armv7", "i386"))
    first = patch_settings({"VALID_ARCHS": "armv7 armv7 arm64 "}, BETA_CARTHAGE_RULES.rules, ctx)
    assert first.settings["VALID_ARCHS"] == "arm64 "
    second = patch_settings(first.settings, BETA_CARTHAGE_RULES.rules, ctx)
    assert second.changed is False


def test_excluded_archs_absent_gets_every_architecture() -> None:
    """Absent EXCLUDED_ARCHS with {armv7, i386} ends up holding both as space-separated tokens."""
    ctx = PatchContext(architectures=("armv7", "i386"))
    result = patch_settings({}, [EXCLUDE_ARCHITECTURES], ctx)
    assert result.settings["EXCLUDED_ARCHS"].split() == ["armv7", "i386"]
    assert result.changes[0].old is None


def test_excluded_archs_appends_missing_only() -> None:
    """Existing exclusions are kept; only missing architectures are appended."""
    ctx = PatchContext(architectures=("armv7", "i386"))
    result = patch_settings({"EXCLUDED_ARCHS": "i386"}, [EXCLUDE_ARCHITECTURES], ctx)
    assert result.settings["EXCLUDED_ARCHS"] == "i386 armv7"


def test_deployment_target_pinned() -> None:
    """IPHONEOS_DEPLOYMENT_TARGET 9.0 becomes exactly 11.0."""
    ctx = PatchContext(architectures=("armv7",), deployment_target="11.0")
    result = patch_settings({"IPHONEOS_DEPLOYMENT_TARGET": "9.0"}, [PIN_DEPLOYMENT_TARGET], ctx)
    assert result.settings["IPHONEOS_DEPLOYMENT_TARGET"] == "11.0"
    assert result.changed is True


def test_deployment_target_absent_is_not_added() -> None:
    """A configuration without IPHONEOS_DEPLOYMENT_TARGET is left without one."""
    ctx = PatchContext(architectures=("armv7",), deployment_target="11.0")
    result = patch_settings({}, [PIN_DEPLOYMENT_TARGET], ctx)
    assert "IPHONEOS_DEPLOYMENT_TARGET" not in result.settings
    assert result.changed is False


def test_deployment_target_already_pinned_no_change() -> None:
    ctx = PatchContext(architectures=("armv7",), deployment_target="11.0")
    result = patch_settings({"IPHONEOS_DEPLOYMENT_TARGET": "11.0"}, [PIN_DEPLOYMENT_TARGET], ctx)
    assert result.changed is False


def test_strip_valid_archs_clears_non_empty() -> None:
    """With the strip rule active any non-empty VALID_ARCHS becomes empty."""
    ctx = XCODE12_RULES.context()
    for value in ("arm64 armv7", "$(ARCHS_STANDARD)", "i386"):
        result = patch_settings({"VALID_ARCHS": value}, [STRIP_VALID_ARCHS], ctx)
        assert result.settings["VALID_ARCHS"] == ""
        assert result.changed is True


def test_strip_valid_archs_leaves_empty_alone() -> None:
    ctx = XCODE12_RULES.context()
    result = patch_settings({"VALID_ARCHS": ""}, [STRIP_VALID_ARCHS], ctx)
    assert result.changed is False


def test_xcode12_rule_set_properties() -> None:
    """After the xcode12 rules every architecture is excluded and the target is pinned."""
    ctx = XCODE12_RULES.context()
    settings = {
        "VALID_ARCHS": "armv7 armv7s arm64",
        "EXCLUDED_ARCHS": "i386",
        "IPHONEOS_DEPLOYMENT_TARGET": "8.0",
    }
    result = patch_settings(settings, XCODE12_RULES.rules, ctx)
    assert result.settings["VALID_ARCHS"] == ""
    for arch in ctx.architectures:
        assert arch in result.settings["EXCLUDED_ARCHS"]
    assert result.settings["IPHONEOS_DEPLOYMENT_TARGET"] == "11.0"
    assert [c.key for c in result.changes] == ["VALID_ARCHS", "EXCLUDED_ARCHS", "IPHONEOS_DEPLOYMENT_TARGET"]
    assert settings["VALID_ARCHS"] == "armv7 armv7s arm64"


def test_patch_is_idempotent() -> None:
    """Patching an already patched configuration yields no changes."""
    for rules in (XCODE12_RULES, BETA_CARTHAGE_RULES):
        ctx = rules.context()
        first = patch_settings(
            {"VALID_ARCHS": "armv7 $(ARCHS_STANDARD)", "IPHONEOS_DEPLOYMENT_TARGET": "9.0"},
            rules.rules,
            ctx,
        )
        assert first.changed is True
        second = patch_settings(first.settings, rules.rules, ctx)
        assert second.changed is False
        assert second.settings == first.settings


def test_normalization_sees_value_after_token_removal() -> None:
    """beta-carthage: tokens are removed first, then the legacy key replaces the whole value."""
    ctx = BETA_CARTHAGE_RULES.context()
    result = patch_settings({"VALID_ARCHS": "armv7 $(ARCHS_STANDARD)"}, BETA_CARTHAGE_RULES.rules, ctx)
    assert result.settings["VALID_ARCHS"] == "$(ARCHS_STANDARD_64_BIT)"
    assert [c.rule for c in result.changes[:2]] == ["remove-valid-arch-tokens", "normalize-arch-standard"]


def test_list_valued_settings_are_not_rewritten() -> None:
    """Non-string values (list settings) are never rewritten."""
    ctx = XCODE12_RULES.context()
    archs = ["armv7", "arm64"]
    result = patch_settings({"VALID_ARCHS": archs, "EXCLUDED_ARCHS": ["i386"]}, XCODE12_RULES.rules, ctx)
    assert result.settings["VALID_ARCHS"] is archs
    assert result.settings["EXCLUDED_ARCHS"] == ["i386"]

