from __future__ import annotations

from collections.abc import Iterable, Mapping

from ncu_groups.models import (
    Component,
    DependencyMap,
    FilteredRelations,
    PackageRelation,
    RelationGraph,
    ReverseIndex,
)


def filter_relations(
    all_deps: Mapping[str, Iterable[str]] | None,
    target_names: Iterable[str] | None,
) -> FilteredRelations:
    """
    从完整依赖表中筛出与目标包相关的根包。

    根包本身是目标包时标记 is_target；直接依赖中的目标包按出现顺序记入
    depends_on_targets。与任何目标包无关的根包不出现在结果中。
    """
    targets = frozenset(target_names or ())
    if not all_deps or not targets:
        return {}

    is_target: dict[str, bool] = {}
    depends: dict[str, list[str]] = {}
    for root, inner in all_deps.items():
        if root in targets:
            is_target[root] = True
            depends.setdefault(root, [])
        for dep in inner or ():
            if dep in targets:
                is_target.setdefault(root, False)
                depends.setdefault(root, []).append(dep)

    return {
        name: PackageRelation(is_target=is_target[name], depends_on_targets=tuple(deps))
        for name, deps in depends.items()
    }


def invert_relations(relations: Mapping[str, PackageRelation]) -> ReverseIndex:
    """
    按目标包重新索引：目标包 -> 直接依赖它的根包列表。

    relations 中的每个包都会得到一个条目（可能为空）。
    """
    reverse: dict[str, list[str]] = {}
    for name, relation in relations.items():
        reverse.setdefault(name, [])
        for dep in relation.depends_on_targets:
            reverse.setdefault(dep, []).append(name)
    return {name: tuple(roots) for name, roots in reverse.items()}


def build_graph(reverse_index: Mapping[str, Iterable[str]]) -> RelationGraph:
    """
    由反向索引构建无向关系图（邻接表）。
    """
    adjacency: dict[str, set[str]] = {}
    for name, linked in reverse_index.items():
        adjacency.setdefault(name, set())
        for other in linked or ():
            adjacency.setdefault(other, set())
            adjacency[name].add(other)
            adjacency[other].add(name)
    return {name: frozenset(neighbors) for name, neighbors in adjacency.items()}


def find_components(graph: Mapping[str, Iterable[str]]) -> tuple[Component, ...]:
    """
    深度优先遍历，将图的节点划分为极大连通分量。

    分量内的顺序为先序访问顺序，不具备语义；比较时应按集合处理。
    """
    visited: set[str] = set()
    components: list[Component] = []

    for start in graph:
        if start in visited:
            continue
        component: list[str] = []
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            component.append(node)
            # reversed so the smallest neighbour is popped first
            for neighbor in sorted(graph.get(node, ()), reverse=True):
                if neighbor not in visited:
                    stack.append(neighbor)
        components.append(tuple(component))

    return tuple(components)


def group_packages(
    all_deps: DependencyMap | None,
    target_names: Iterable[str] | None,
) -> tuple[Component, ...]:
    """
    过滤 -> 反转 -> 建图 -> 求连通分量。
    """
    relations = filter_relations(all_deps, target_names)
    reverse_index = invert_relations(relations)
    graph = build_graph(reverse_index)
    return find_components(graph)
