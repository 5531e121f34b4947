"""LangGraph pipeline for turning a map image into a rendered heatmap."""

from langgraph.graph import END, StateGraph

from htmap.models import PipelineConfig, PipelineState, ProcessingStage
from htmap.nodes import auto_fill, extract, load, render, save


def _has_fatal(state: PipelineState, stage: ProcessingStage) -> bool:
    return any(err.stage == stage and not err.recoverable for err in state.errors)


def _route_load(state: PipelineState) -> str:
    if _has_fatal(state, ProcessingStage.LOAD) or state.source is None:
        return END
    return "extract"


def _route_extract(state: PipelineState) -> str:
    if _has_fatal(state, ProcessingStage.EXTRACT) or state.field is None:
        return END
    # A field the extraction already bootstrapped from the fill needs no second pass
    if state.config.auto_fill and not state.filled:
        return "auto_fill"
    return "render"


def _route_auto_fill(state: PipelineState) -> str:
    if _has_fatal(state, ProcessingStage.FILL):
        return END
    return "render"


def _route_render(state: PipelineState) -> str:
    if _has_fatal(state, ProcessingStage.RENDER) or state.output is None:
        return END
    return "save"


def create_pipeline():
    graph = StateGraph(PipelineState)

    graph.add_node("load", load)
    graph.add_node("extract", extract)
    graph.add_node("auto_fill", auto_fill)
    graph.add_node("render", render)
    graph.add_node("save", save)

    graph.set_entry_point("load")

    graph.add_conditional_edges("load", _route_load, {"extract": "extract", END: END})
    graph.add_conditional_edges(
        "extract",
        _route_extract,
        {"auto_fill": "auto_fill", "render": "render", END: END},
    )
    graph.add_conditional_edges("auto_fill", _route_auto_fill, {"render": "render", END: END})
    graph.add_conditional_edges("render", _route_render, {"save": "save", END: END})
    graph.add_edge("save", END)

    return graph.compile()


def run_pipeline(
    image_path: str,
    output_path: str | None = None,
    config: PipelineConfig | None = None,
) -> PipelineState:
    initial = PipelineState(
        image_path=image_path,
        output_path=output_path,
        config=config or PipelineConfig(),
    )
    result = pipeline.invoke(initial)
    return result if isinstance(result, PipelineState) else PipelineState(**result)


pipeline = create_pipeline()
