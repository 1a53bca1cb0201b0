"""Tests for the Vue single-file component scanner."""

from __future__ import annotations

import textwrap

from webpulse.scanners.vue import VueScanner

SAMPLE = textwrap.dedent(
    """
    <template>
      <div>
        <p v-if="ok" :title="msg" @click="go">{{ msg }}</p>
        <li v-for="item in items" v-bind:key="item" v-on:click="pick(item)">x</li>
        <input v-model="name">
        <template #footer><span>f</span></template>
      </div>
    </template>

    <script setup>
    import { computed, watch } from "vue";
    const total = computed(() => 1);
    watch(total, () => {});
    const emit = defineEmits(["save"]);
    emit("save");
    provide("key", 1);
    </script>

    <style scoped>
    .a { color: red; }
    </style>
    """
)


def test_sections_and_flags() -> None:
    info = VueScanner().scan(SAMPLE)

    assert info.has_template is True
    assert info.has_script is True
    assert info.has_style is True
    assert info.uses_script_setup is True
    assert info.uses_scoped_styles is True
    assert info.framework.has_vue is True


def test_template_markers() -> None:
    info = VueScanner().scan(SAMPLE)

    assert info.directive_count == 3
    assert info.event_binding_count == 2
    assert info.prop_binding_count == 2


def test_script_markers() -> None:
    info = VueScanner().scan(SAMPLE)

    assert info.computed_property_count == 1
    assert info.watcher_count == 1
    assert info.emit_count == 1
    assert info.provide_inject_count == 1


def test_template_markers_outside_template_are_ignored() -> None:
    content = '<script>\nconst s = "v-if v-for";\n</script>\n<style>\n.a { color: red }\n</style>'
    info = VueScanner().scan(content)

    assert info.directive_count == 0
    assert info.prop_binding_count == 0
    assert info.has_template is False


def test_options_api_markers() -> None:
    content = textwrap.dedent(
        """
        <script>
        export default {
          computed: { full() { return 1 } },
          watch: { value() {} },
          inject: ["theme"],
        }
        </script>
        """
    )
    info = VueScanner().scan(content)

    assert info.computed_property_count == 1
    assert info.watcher_count == 1
    assert info.uses_script_setup is False


def test_unterminated_section_runs_to_end_of_file() -> None:
    info = VueScanner().scan("<template>\n<p v-if=\"a\"></p>")
    assert info.has_template is True
    assert info.directive_count == 1


def test_lookalike_tags_do_not_open_sections() -> None:
    info = VueScanner().scan("<templates></templates><scripts></scripts>")
    assert info.has_template is False
    assert info.has_script is False


def test_directive_threshold_issue() -> None:
    content = "<template>\n" + '<p v-if="a"></p>\n' * 51 + "</template>"
    info = VueScanner().scan(content)

    assert info.directive_count == 51
    assert [issue.description for issue in info.potential_issues] == [
        "High number of directives (51) may indicate complex template logic"
    ]


def test_watcher_threshold_issue() -> None:
    content = "<script>\n" + "watch(a, f);\n" * 21 + "</script>"
    info = VueScanner().scan(content)

    assert info.watcher_count == 21
    assert info.potential_issues[0].description == (
        "High number of watchers (21) may impact performance"
    )
