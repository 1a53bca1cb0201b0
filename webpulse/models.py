"""Core data models shared across webpulse components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar, overload

T = TypeVar("T")

MAX_SCANNER_ISSUES = 20
MAX_PROJECT_ISSUES = 100
MAX_CUSTOM_ELEMENTS = 50
MAX_EXTERNAL_RESOURCES = 50
MAX_FRAMEWORK_COMPONENTS = 50
MAX_DEPENDENCIES = 1000
MAX_CACHED_DEPENDENCIES = 1000
MAX_MODULE_PATHS = 50
MAX_WORKSPACE_GLOBS = 50
MAX_PACKAGES = 100
MAX_PACKAGE_SCRIPTS = 50
MAX_TASK_GROUPS = 20
MAX_SALESFORCE_METADATA = 9999


class BoundedList(Generic[T]):
    """Ordered list that keeps the first ``capacity`` items and drops the rest."""

    def __init__(self, capacity: int, items: Iterable[T] = ()) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._items: List[T] = []
        for item in items:
            self.append(item)

    def append(self, item: T) -> bool:
        """Store ``item`` unless the list is full; return whether it was kept."""
        if len(self._items) >= self.capacity:
            return False
        self._items.append(item)
        return True

    def extend(self, items: Iterable[T]) -> int:
        return sum(1 for item in items if self.append(item))

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> List[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundedList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"BoundedList(capacity={self.capacity}, items={self._items!r})"


def _bounded(capacity: int):
    return field(default_factory=lambda: BoundedList(capacity))


@dataclass
class PotentialIssue:
    """Heuristic warning attached to analysis output."""

    description: str
    location: str = ""


@dataclass
class CustomElement:
    name: str
    count: int = 1


@dataclass
class ExternalResource:
    url: str
    type: str
    size: int = 0


@dataclass
class FrameworkInfo:
    """Framework and tooling fingerprint for a file, package or project."""

    has_react: bool = False
    has_vue: bool = False
    has_angular: bool = False
    has_svelte: bool = False
    has_nodejs: bool = False
    has_nextjs: bool = False
    has_nuxtjs: bool = False
    react_hooks_count: int = 0
    vue_composition_api: bool = False
    uses_typescript: bool = False
    has_bundler: bool = False
    has_testing: bool = False
    has_state_management: bool = False
    has_routing: bool = False
    has_css_framework: bool = False
    has_ui_library: bool = False
    has_form_library: bool = False
    typescript_version: str = ""
    node_version: str = ""
    primary_bundler: str = ""
    primary_ui_library: str = ""
    css_solution: str = ""
    uses_css_modules: bool = False
    uses_css_in_js: bool = False
    uses_tailwind: bool = False
    uses_sass: bool = False
    uses_less: bool = False
    has_e2e_testing: bool = False
    has_unit_testing: bool = False
    has_component_testing: bool = False
    has_linting: bool = False
    has_formatting: bool = False
    has_ci_cd: bool = False
    has_docker: bool = False
    has_deployment_config: bool = False
    has_hot_reload: bool = False
    has_dev_server: bool = False
    has_debug_config: bool = False
    uses_npm: bool = False
    uses_yarn: bool = False
    uses_pnpm: bool = False

    def merge(self, other: "FrameworkInfo") -> None:
        """Fold ``other`` into this fingerprint: OR flags, add counts, keep first strings."""
        for item in fields(self):
            current = getattr(self, item.name)
            incoming = getattr(other, item.name)
            if isinstance(current, bool):
                setattr(self, item.name, current or incoming)
            elif isinstance(current, int):
                setattr(self, item.name, current + incoming)
            elif not current and incoming:
                setattr(self, item.name, incoming)

    @property
    def has_any_framework(self) -> bool:
        return any(
            (self.has_react, self.has_vue, self.has_angular, self.has_svelte, self.has_nodejs)
        )


@dataclass
class HTMLInfo:
    tag_count: int = 0
    script_count: int = 0
    style_count: int = 0
    link_count: int = 0
    is_zephyr: bool = False
    is_react: bool = False
    is_vue: bool = False
    is_angular: bool = False
    is_svelte: bool = False
    custom_elements: BoundedList[CustomElement] = _bounded(MAX_CUSTOM_ELEMENTS)
    external_resources: BoundedList[ExternalResource] = _bounded(MAX_EXTERNAL_RESOURCES)
    framework_components: BoundedList[str] = _bounded(MAX_FRAMEWORK_COMPONENTS)
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class CSSInfo:
    rule_count: int = 0
    selector_count: int = 0
    property_count: int = 0
    media_query_count: int = 0
    keyframe_count: int = 0
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class JSInfo:
    function_count: int = 0
    variable_count: int = 0
    class_count: int = 0
    react_component_count: int = 0
    vue_instance_count: int = 0
    angular_module_count: int = 0
    event_listener_count: int = 0
    async_function_count: int = 0
    promise_count: int = 0
    closure_count: int = 0
    framework: FrameworkInfo = field(default_factory=FrameworkInfo)
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class TSInfo:
    interface_count: int = 0
    type_definition_count: int = 0
    type_alias_count: int = 0
    generic_type_count: int = 0
    enum_count: int = 0
    framework: FrameworkInfo = field(default_factory=FrameworkInfo)
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class JSXInfo:
    custom_component_count: int = 0
    hook_count: int = 0
    prop_spreading_count: int = 0
    max_component_nesting: int = 0
    framework: FrameworkInfo = field(default_factory=FrameworkInfo)
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class VueInfo:
    has_template: bool = False
    has_script: bool = False
    has_style: bool = False
    uses_script_setup: bool = False
    uses_scoped_styles: bool = False
    directive_count: int = 0
    computed_property_count: int = 0
    watcher_count: int = 0
    event_binding_count: int = 0
    prop_binding_count: int = 0
    emit_count: int = 0
    provide_inject_count: int = 0
    framework: FrameworkInfo = field(default_factory=FrameworkInfo)
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class XMLInfo:
    element_count: int = 0
    attribute_count: int = 0
    namespace_count: int = 0
    max_nesting_level: int = 0
    has_xml_declaration: bool = False
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class JSONInfo:
    object_count: int = 0
    array_count: int = 0
    key_count: int = 0
    max_nesting_level: int = 0
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_SCANNER_ISSUES)


@dataclass
class Dependency:
    name: str
    version: str = ""
    is_dev_dependency: bool = False


class DependencyList(BoundedList[Dependency]):
    """Dependency collection deduplicated by name; the first entry for a name wins."""

    def __init__(self, capacity: int = MAX_DEPENDENCIES, items: Iterable[Dependency] = ()) -> None:
        super().__init__(capacity, items)

    def append(self, item: Dependency) -> bool:
        if self.get(item.name) is not None:
            return False
        return super().append(item)

    add = append

    def get(self, name: str) -> Optional[Dependency]:
        for dependency in self:
            if dependency.name == name:
                return dependency
        return None

    def names(self) -> List[str]:
        return [dependency.name for dependency in self]


@dataclass
class CachedDependency:
    name: str
    version: str
    count: int = 1


class DependencyCache:
    """Run-scoped record of every dependency sighting, keyed by name."""

    def __init__(self, capacity: int = MAX_CACHED_DEPENDENCIES) -> None:
        self.capacity = capacity
        self._items: Dict[str, CachedDependency] = {}

    def record(self, name: str, version: str) -> None:
        cached = self._items.get(name)
        if cached is not None:
            cached.count += 1
            return
        if len(self._items) >= self.capacity:
            return
        self._items[name] = CachedDependency(name=name, version=version)

    def get(self, name: str) -> Optional[CachedDependency]:
        return self._items.get(name)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CachedDependency]:
        return iter(self._items.values())


@dataclass
class PackageReference:
    source: str
    target: str


@dataclass
class PackageScript:
    name: str
    command: str


@dataclass
class PackageConfig:
    refs: List[PackageReference] = field(default_factory=list)
    scripts: BoundedList[PackageScript] = _bounded(MAX_PACKAGE_SCRIPTS)
    build_output_path: str = ""
    test_output_path: str = ""
    has_shared_configs: bool = False
    uses_typescript: bool = False
    uses_eslint: bool = False
    uses_prettier: bool = False
    uses_jest: bool = False
    node_version: str = ""


@dataclass
class PackageRecord:
    """One member package of a workspace."""

    name: str = ""
    version: str = ""
    path: str = ""
    dependencies: DependencyList = field(default_factory=DependencyList)
    framework_info: FrameworkInfo = field(default_factory=FrameworkInfo)
    config: PackageConfig = field(default_factory=PackageConfig)


@dataclass
class TaskGroup:
    name: str
    type: str
    packages: BoundedList[str] = _bounded(MAX_PACKAGES)


@dataclass
class WorkspaceInfo:
    """Monorepo topology; meaningful only when the project is a monorepo."""

    root_path: str = ""
    name: str = ""
    packages: BoundedList[PackageRecord] = _bounded(MAX_PACKAGES)
    shared_dependencies: DependencyList = field(default_factory=DependencyList)
    workspace_globs: BoundedList[str] = _bounded(MAX_WORKSPACE_GLOBS)
    is_lerna: bool = False
    is_yarn_workspace: bool = False
    is_pnpm_workspace: bool = False
    is_nx_workspace: bool = False
    is_rush: bool = False
    has_hoisting: bool = False
    has_workspaces_prefix: bool = False
    uses_npm_workspaces: bool = False
    uses_changesets: bool = False
    uses_turborepo: bool = False
    has_shared_configs: bool = False
    uses_conventional_commits: bool = False
    uses_git_tags: bool = False
    task_groups: BoundedList[TaskGroup] = _bounded(MAX_TASK_GROUPS)
    build_cache_path: str = ""
    tsconfig_path: str = ""
    eslint_config_path: str = ""
    prettier_config_path: str = ""
    jest_config_path: str = ""
    babel_config_path: str = ""
    version_strategy: str = ""
    fixed_version: str = ""
    tool_version: str = ""
    uses_semantic_release: bool = False

    @property
    def package_count(self) -> int:
        return len(self.packages)

    def find_package(self, name: str) -> Optional[PackageRecord]:
        for package in self.packages:
            if package.name == name:
                return package
        return None


@dataclass
class ProjectRecord:
    """Project-wide aggregate produced by one analysis run."""

    root_path: str = ""
    framework_info: FrameworkInfo = field(default_factory=FrameworkInfo)
    framework: str = ""
    total_dependencies: int = 0
    dev_dependencies: int = 0
    prod_dependencies: int = 0
    framework_dependencies: int = 0
    html_file_count: int = 0
    css_file_count: int = 0
    js_file_count: int = 0
    json_file_count: int = 0
    ts_file_count: int = 0
    jsx_file_count: int = 0
    vue_file_count: int = 0
    xml_file_count: int = 0
    image_file_count: int = 0
    react_component_count: int = 0
    custom_elements: BoundedList[CustomElement] = _bounded(MAX_CUSTOM_ELEMENTS)
    external_resources: BoundedList[ExternalResource] = _bounded(MAX_EXTERNAL_RESOURCES)
    framework_components: BoundedList[str] = _bounded(MAX_FRAMEWORK_COMPONENTS)
    total_html_info: HTMLInfo = field(default_factory=HTMLInfo)
    total_css_info: CSSInfo = field(default_factory=CSSInfo)
    total_js_info: JSInfo = field(default_factory=JSInfo)
    total_json_info: JSONInfo = field(default_factory=JSONInfo)
    total_ts_info: TSInfo = field(default_factory=TSInfo)
    total_jsx_info: JSXInfo = field(default_factory=JSXInfo)
    total_vue_info: VueInfo = field(default_factory=VueInfo)
    total_xml_info: XMLInfo = field(default_factory=XMLInfo)
    salesforce_metadata: BoundedList[str] = _bounded(MAX_SALESFORCE_METADATA)
    potential_issues: BoundedList[PotentialIssue] = _bounded(MAX_PROJECT_ISSUES)
    dependencies: DependencyList = field(default_factory=DependencyList)
    module_paths: BoundedList[str] = _bounded(MAX_MODULE_PATHS)
    uses_commonjs: bool = False
    uses_esmodules: bool = False
    has_webpack: bool = False
    has_vite: bool = False
    has_babel: bool = False
    has_ci: bool = False
    has_env_config: bool = False
    has_typescript: bool = False
    workspace: WorkspaceInfo = field(default_factory=WorkspaceInfo)
    is_monorepo: bool = False

    @property
    def custom_element_count(self) -> int:
        return len(self.custom_elements)

    @property
    def external_resource_count(self) -> int:
        return len(self.external_resources)

    @property
    def potential_issue_count(self) -> int:
        return len(self.potential_issues)

    @property
    def salesforce_metadata_count(self) -> int:
        return len(self.salesforce_metadata)

    def add_issue(self, description: str, location: str = "") -> bool:
        return self.potential_issues.append(PotentialIssue(description, location))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the record, derived counts included."""
        payload = _plain(asdict(self))
        payload["custom_element_count"] = self.custom_element_count
        payload["external_resource_count"] = self.external_resource_count
        payload["potential_issue_count"] = self.potential_issue_count
        payload["salesforce_metadata_count"] = self.salesforce_metadata_count
        payload["workspace"]["package_count"] = self.workspace.package_count
        return payload


@dataclass
class ResourceEstimation:
    js_heap_size: int = 0
    transferred_data: int = 0
    resource_size: int = 0
    dom_content_loaded: int = 0
    largest_contentful_paint: int = 0


def _plain(value: Any) -> Any:
    # asdict deep-copies BoundedList instances as-is; flatten them to lists.
    if isinstance(value, BoundedList):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if hasattr(value, "__dataclass_fields__"):
        return _plain(asdict(value))
    return value
