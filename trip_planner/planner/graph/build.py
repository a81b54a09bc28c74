"""
Graph construction for the route planner.

Builds and compiles the LangGraph workflow for one planning request.
Nodes that need collaborators (model invoker, catalog) are created by
factories so every compiled graph carries its own injected dependencies.
"""

from typing import Optional

from langgraph.graph import StateGraph, END

from trip_planner.planner.fallback import DEFAULT_CATALOG, FallbackCatalog
from trip_planner.planner.graph.config import DEFAULT_CONFIG, PlannerConfig
from trip_planner.planner.graph.router import route_after_extract, route_after_generate
from trip_planner.planner.schemas import PlannerGraphState
from trip_planner.planner.inference import InvokeFn
from trip_planner.planner.nodes import (
    extract_node,
    make_build_request_node,
    make_fallback_node,
    make_generate_node,
)


def create_planner_graph(
    invoke: InvokeFn,
    config: Optional[PlannerConfig] = None,
    catalog: Optional[FallbackCatalog] = None,
):
    """
    Create and compile the LangGraph workflow for planning.

    The graph structure is:
        Entry -> build_request -> generate
          -> "extract"  -> extract -> (route ? END : fallback)
          -> "fallback" -> fallback -> END

    Args:
        invoke: Inference boundary used by the generate node
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.
        catalog: Optional fallback catalog. Uses DEFAULT_CATALOG if not provided.

    Returns:
        Compiled LangGraph application ready for ``ainvoke``.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if catalog is None:
        catalog = DEFAULT_CATALOG

    graph = StateGraph(PlannerGraphState)

    # Add nodes
    graph.add_node("build_request", make_build_request_node(config))
    graph.add_node("generate", make_generate_node(invoke, config))
    graph.add_node("extract", extract_node)
    graph.add_node("fallback", make_fallback_node(catalog))

    # Set entry point and edges
    graph.set_entry_point("build_request")
    graph.add_edge("build_request", "generate")
    graph.add_conditional_edges(
        "generate",
        route_after_generate,
        {
            "extract": "extract",
            "fallback": "fallback",
        },
    )
    graph.add_conditional_edges(
        "extract",
        route_after_extract,
        {
            "done": END,
            "fallback": "fallback",
        },
    )
    graph.add_edge("fallback", END)

    return graph.compile()
