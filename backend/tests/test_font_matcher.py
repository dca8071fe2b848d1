"""
Unit tests for font approval.
"""
from brandguard.models import ApprovedFont, DocumentSnapshot, FontRules, LayerSnapshot
from brandguard.services.font_matcher import (
    FontMatcher, exact_match_policy, substring_match_policy
)


class TestMatchPolicies:
    """Tests for the named font match policies."""

    def test_substring_policy_accepts_variants(self):
        assert substring_match_policy("open sans bold", ["roboto", "open sans"])

    def test_substring_policy_accepts_shorter_names(self):
        """Test the reverse direction: input contained in an approved name."""
        assert substring_match_policy("sans", ["open sans"])

    def test_substring_policy_rejects_unrelated(self):
        assert not substring_match_policy("comic sans ms", ["roboto", "open sans"])

    def test_exact_policy(self):
        assert exact_match_policy("roboto", ["roboto"])
        assert not exact_match_policy("roboto condensed", ["roboto"])


class TestFontApproval:
    """Tests for FontMatcher.is_approved."""

    def test_normalized_exact_match(self, brand_rules):
        matcher = FontMatcher(brand_rules.fonts)
        assert matcher.is_approved("  ROBOTO ")
        assert matcher.is_approved("Open   Sans")

    def test_family_variant_approved(self, brand_rules):
        assert FontMatcher(brand_rules.fonts).is_approved("Roboto Mono")

    def test_unapproved_font(self, brand_rules):
        assert not FontMatcher(brand_rules.fonts).is_approved("Comic Sans MS")

    def test_strict_policy_swappable(self, brand_rules):
        matcher = FontMatcher(brand_rules.fonts, policy=exact_match_policy)
        assert matcher.is_approved("roboto")
        assert not matcher.is_approved("Roboto Mono")


class TestFontRulesDefaults:
    """Tests for the default font."""

    def test_default_falls_back_to_first_approved(self):
        rules = FontRules(approved=[ApprovedFont(name="Inter"), ApprovedFont(name="Lato")])
        assert rules.default.name == "Inter"

    def test_explicit_default_kept(self):
        rules = FontRules.model_validate({
            "approved": [{"name": "Inter"}, {"name": "Lato"}],
            "default": {"name": "Lato"}
        })
        assert rules.default.name == "Lato"

    def test_no_fonts_no_default(self):
        assert FontRules(approved=[]).default is None


class TestDocumentFontCheck:
    """Tests for scanning text layers."""

    def test_one_violation_per_text_layer(self, brand_rules):
        document = DocumentSnapshot(layers=[
            LayerSnapshot(id="h1", name="Heading", type="text", font_family="Comic Sans MS"),
            LayerSnapshot(id="h2", name="Body", type="text", font_family="Roboto"),
            LayerSnapshot(id="h3", type="text", font_family="Papyrus"),
        ])
        report = FontMatcher(brand_rules.fonts).check(document)
        assert report.violation_count == 2
        assert [v.layer_id for v in report.violations] == ["h1", "h3"]
        assert all(v.suggested_value == "Roboto" for v in report.violations)
        assert report.violations[1].layer_name == "Unnamed Text"
        assert report.all_values == ["Comic Sans MS", "Roboto", "Papyrus"]

    def test_non_text_layers_ignored(self, brand_rules):
        document = DocumentSnapshot(layers=[
            LayerSnapshot(id="shape", name="Shape", font_family="Comic Sans MS"),
        ])
        assert FontMatcher(brand_rules.fonts).check(document).is_compliant

    def test_text_layer_without_font_ignored(self, brand_rules):
        document = DocumentSnapshot(layers=[LayerSnapshot(id="t", name="Text", type="text")])
        assert FontMatcher(brand_rules.fonts).check(document).is_compliant
