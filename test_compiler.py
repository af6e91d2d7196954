"""Tests for layout ingestion, compilation and configuration."""

import json
import logging

import pytest

from layout_compiler import (CollectingReporter, CompilerConfig, LayoutAttribute,
                             LayoutCompiler, LayoutValidationError, NullEmitter,
                             RecordingEmitter, ResolutionError, SizeClass, SizeClassCondition,
                             View, ViewIndex, compile_layout, load_config, parse_constraints,
                             parse_layout)
from layout_compiler.validator import parse_view_id

PROFILE_LAYOUT = {
    "name": "profile",
    "root": {
        "views": {
            "!card:CardView": {
                "template": "padded",
                "z-index": "2",
                "properties": {"backgroundColor": "white", "cornerRadius": 8},
                "views": {
                    "!avatar": {
                        "constraints": {
                            "top leading": "@super <12",
                            "size": "+48",
                        },
                    },
                    "!name": {
                        "constraints": {
                            "leading": "@avatar.trailing +8",
                            "trailing": ["@super <12", {"to": "super", "relation": "<=",
                                                        "constant": -4, "identifier": "tight"}],
                            "centerY": {"to": "avatar"},
                        },
                    },
                },
            },
        },
    },
    "templates": {
        "padded": {"constraints": {"edges": "@super <16"}},
    },
}


class TestIngestion:

    @pytest.mark.parametrize("raw, expected", [
        ("avatar", ("avatar", False, None)),
        ("!avatar", ("avatar", True, None)),
        ("!avatar:ImageView", ("avatar", True, "ImageView")),
        ("avatar:ImageView", ("avatar", False, None)),
    ])
    def test_view_id(self, raw, expected):
        assert parse_view_id(raw) == expected

    def test_constraints_block_shapes(self, reporter):
        directives = parse_constraints({
            "top": "@super",
            "bottom": {"to": "super"},
            "width": ["+10", {"constant": 20}, 5],
            "height": None,
        }, reporter)
        assert [d.lhs for d in directives] == ["top", "bottom", "width", "width"]
        assert len(reporter.errors) == 2

    def test_parse_layout_document(self, reporter):
        document = parse_layout(PROFILE_LAYOUT, reporter)
        card = document.root.subviews[0]

        assert document.name == "profile"
        assert card.name == "card"
        assert card.is_new and card.superclass == "CardView"
        assert card.z_index == 2
        assert card.properties == {"backgroundColor": "white"}
        assert card.templates == ["padded"]
        assert [v.name for v in card.subviews] == ["avatar", "name"]
        assert "padded" in document.templates

    def test_json_and_yaml_text(self, reporter):
        yaml_text = "views:\n  '!box':\n    constraints:\n      edges: '@super'\n"
        from_json = parse_layout(json.dumps(PROFILE_LAYOUT), reporter)
        from_yaml = parse_layout(yaml_text, reporter)
        assert from_json.root.subviews[0].name == "card"
        assert from_yaml.root.subviews[0].name == "box"

    @pytest.mark.parametrize("source", ["- a\n- b\n", "{unclosed", 42, {"root": "nope"}])
    def test_unreadable_documents(self, reporter, source):
        with pytest.raises(LayoutValidationError):
            parse_layout(source, reporter)


class TestCompiler:

    def test_compile_profile(self):
        reporter = CollectingReporter()
        emitter = RecordingEmitter()
        root = View("root")

        layout = compile_layout(PROFILE_LAYOUT, root_view=root, reporter=reporter, emitter=emitter)

        assert layout.diagnostics == []
        card = root.subviews[0]
        assert card.name == "card" and card.superclass == "CardView"
        assert [v.name for v in card.subviews] == ["avatar", "name"]

        card_constants = {s.left_attribute: s.constant for s in layout.for_view("card")}
        assert card_constants == {
            LayoutAttribute.LEADING: 16.0,
            LayoutAttribute.TOP: 16.0,
            LayoutAttribute.TRAILING: -16.0,
            LayoutAttribute.BOTTOM: -16.0,
        }

        avatar = {s.left_attribute: s for s in layout.for_view("avatar")}
        assert avatar[LayoutAttribute.WIDTH].comparable_view is None
        assert avatar[LayoutAttribute.WIDTH].constant == 48.0
        assert avatar[LayoutAttribute.TOP].comparable_view is card

        name_specs = layout.for_view("name")
        assert len(name_specs) == 4
        leading = next(s for s in name_specs if s.left_attribute == LayoutAttribute.LEADING)
        assert leading.comparable_view.name == "avatar"
        assert leading.right_attribute == LayoutAttribute.TRAILING
        tight = next(s for s in name_specs if s.identifier == "tight")
        assert tight.constant == -4.0
        assert len(emitter.emitted) == len(layout.constraints) == 12

    def test_existing_views_are_looked_up(self):
        root = View("root")
        existing = View("header", parent=root)
        reporter = CollectingReporter()

        layout = compile_layout({"views": {"header": {"constraints": {"height": "+44"}}}},
                                root_view=root, reporter=reporter)
        assert reporter.errors
        assert layout.constraints == []

        compiler = LayoutCompiler(reporter=reporter, emitter=NullEmitter())
        index = ViewIndex(root)
        index.register("header", existing)
        document = parse_layout({"views": {"header": {"constraints": {"height": "+44"}}}}, reporter)
        layout = compiler.compile(document, root, index)
        assert [s.target for s in layout.constraints] == [existing]

    def test_missing_view_skips_only_its_subtree(self):
        reporter = CollectingReporter()
        layout = compile_layout({"views": {
            "ghost": {"views": {"!child": {"constraints": {"top": "@super"}}}},
            "!box": {"constraints": {"top": "@super"}},
        }}, reporter=reporter)

        assert [s.target.name for s in layout.constraints] == ["box"]
        assert len(reporter.errors) == 1

    def test_bad_directives_do_not_abort_siblings(self):
        reporter = CollectingReporter()
        layout = compile_layout({"views": {
            "!box": {"constraints": {
                "top": "@nowhere",
                "leading": "@super <abc",
                "bottom": "@super <8",
            }},
        }}, reporter=reporter)

        attrs = {s.left_attribute: s.constant for s in layout.constraints}
        assert attrs == {LayoutAttribute.LEADING: 0.0, LayoutAttribute.BOTTOM: -8.0}
        assert len(reporter.errors) == 1
        assert len(reporter.warnings) == 1
        assert len(layout.diagnostics) == 2

    def test_unknown_and_recursive_templates(self):
        reporter = CollectingReporter()
        layout = compile_layout({
            "root": {"views": {"!box": {"template": ["missing", "loop"]}}},
            "templates": {
                "loop": {"template": "loop", "constraints": {"height": "+10"}},
            },
        }, reporter=reporter)

        assert [s.left_attribute for s in layout.constraints] == [LayoutAttribute.HEIGHT]
        assert len(reporter.errors) == 2

    def test_root_view_required(self, reporter):
        document = parse_layout({"views": {}}, reporter)
        with pytest.raises(ResolutionError):
            LayoutCompiler(reporter=reporter).compile(document, None)

    def test_size_class_environment(self):
        config = CompilerConfig(horizontal_size_class="regular")
        emitter = RecordingEmitter(config.environment)
        compile_layout({"views": {"!box": {"constraints": {
            "top": ["@super +8 hc", "@super +20 hr"],
        }}}}, config=config, emitter=emitter, reporter=CollectingReporter())

        assert [c.spec.constant for c in emitter.emitted if c.active] == [20.0]
        assert emitter.environment.horizontal == SizeClass.REGULAR

    def test_size_class_change_regates_recorded_constraints(self):
        root = View("root")
        emitter = RecordingEmitter(SizeClassCondition(horizontal=SizeClass.COMPACT))
        compile_layout({"views": {"!box": {"constraints": {
            "top": ["@super +8 hc", "@super +20 hr"],
        }}}}, root_view=root, emitter=emitter, reporter=CollectingReporter())
        box = root.subviews[0]
        assert [s.constant for s in emitter.active] == [8.0]

        emitter.update_environment(SizeClassCondition(horizontal=SizeClass.REGULAR))

        assert [s.constant for s in emitter.active] == [20.0]
        assert [c.active for c in box.applied_constraints] == [False, True]

    def test_view_placed_inside_its_own_descendant(self):
        root = View("root")
        reporter = CollectingReporter()
        layout = compile_layout({"views": {"!card": {
            "constraints": {"top": "@super"},
            "views": {"!inner": {"views": {"card": {"views": {"!deep": {}}}}}},
        }}}, root_view=root, reporter=reporter)

        card = root.subviews[0]
        assert card.parent is root
        assert [v.name for v in card.subviews] == ["inner"]
        assert card.subviews[0].subviews == []
        assert [s.target.name for s in layout.constraints] == ["card"]
        assert len(reporter.errors) == 1
        assert "card" in reporter.errors[0].message

    def test_resolution_warnings_reach_the_compiler_reporter(self):
        parse_reporter = CollectingReporter()
        compile_reporter = CollectingReporter()
        document = parse_layout({"views": {"!box": {"constraints": {"leading": "@super <abc"}}}},
                                parse_reporter)

        compiler = LayoutCompiler(reporter=compile_reporter, emitter=NullEmitter())
        layout = compiler.compile(document, View("root"))

        assert parse_reporter.diagnostics == []
        assert len(compile_reporter.warnings) == 1
        assert layout.diagnostics == compile_reporter.diagnostics

    def test_layout_to_dict(self):
        layout = compile_layout({"views": {"!box": {"constraints": {
            "top": "@nowhere",
            "leading": "@super <abc #start",
        }}}}, reporter=CollectingReporter())

        data = layout.to_dict()
        assert [c["left_attribute"] for c in data["constraints"]] == ["leading"]
        assert data["constraints"][0]["comparable_view"] == "root"
        assert data["constraints"][0]["identifier"] == "start"
        assert sorted(d["level"] for d in data["diagnostics"]) == ["error", "warning"]


class TestViewHierarchy:

    def test_add_subview_refuses_ancestors(self):
        root = View("root")
        child = View("child", parent=root)

        with pytest.raises(ValueError):
            child.add_subview(root)
        with pytest.raises(ValueError):
            root.add_subview(root)
        assert root.parent is None
        assert child.parent is root

    def test_reparenting_moves_the_view(self):
        root = View("root")
        left = View("left", parent=root)
        right = View("right", parent=root)
        item = View("item", parent=left)

        right.add_subview(item)
        assert left.subviews == []
        assert item.parent is right
        assert item.shares_ancestry(left)

    def test_view_index(self):
        root = View("root")
        index = ViewIndex(root)
        index.register("child", View("child", parent=root))
        assert len(index) == 2
        assert "child" in index
        assert index.lookup("missing") is None


class TestConfig:

    def test_defaults(self):
        config = CompilerConfig()
        assert config.parent_reference == "super"
        assert config.independent_ignores_explicit_view is False
        assert config.environment.horizontal == SizeClass.UNSPECIFIED

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "compiler.yaml"
        path.write_text("independent_ignores_explicit_view: true\n"
                        "vertical_size_class: compact\n"
                        "unknown_key: 1\n")
        config = load_config(path)
        assert config.independent_ignores_explicit_view is True
        assert config.environment.vertical == SizeClass.COMPACT

    def test_unknown_size_class_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="layout_compiler.config"):
            config = CompilerConfig(horizontal_size_class="huge")
        assert config.horizontal_size_class == "any"
        assert config.environment.horizontal == SizeClass.UNSPECIFIED
        assert "huge" in caplog.text

    def test_custom_parent_reference(self):
        config = CompilerConfig(parent_reference="parent")
        reporter = CollectingReporter()
        layout = compile_layout({"views": {"!box": {"constraints": {"top": "@parent <4"}}}},
                                config=config, reporter=reporter)
        assert layout.constraints[0].comparable_view.name == "root"
        assert reporter.diagnostics == []
