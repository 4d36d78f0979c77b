from __future__ import annotations

import gradio as gr

from partsearch.services.search_service import SearchService

COLUMNS = ["Product", "Brand", "Description", "Condition", "Quality", "Years", "Score"]


def search_rows(service: SearchService, query: str, year: float | None = None, limit: float | None = None) -> list[list]:
    text = (query or "").strip()
    if not text:
        return []
    size = int(limit) if limit else None
    if year:
        result = service.search_with_year(text, int(year), limit=size)
    else:
        result = service.search(text, limit=size)
    return [
        [
            c.record.product_id,
            c.record.vehicle_brand,
            c.record.short_description,
            c.record.condition,
            c.record.quality,
            f"{c.record.year_from}-{c.record.year_to}",
            round(c.score, 4),
        ]
        for c in result.page.items
    ]


def build_demo(service: SearchService) -> gr.Blocks:
    def run_search(query: str, year: float | None, limit: float) -> list[list]:
        return search_rows(service, query, year, limit)

    with gr.Blocks(title="Vehicle Parts Search") as demo:
        gr.Markdown(
            """
            # Vehicle Parts Search
            Fuzzy search over the parts inventory by vehicle brand and description.
            Add a year to keep only parts valid for that model year.
            """
        )
        with gr.Row():
            query = gr.Textbox(label="Search", placeholder="Toyota sensor oxigeno")
            year = gr.Number(label="Year", precision=0, value=None)
            limit = gr.Slider(
                minimum=1,
                maximum=service.max_limit,
                step=1,
                value=service.default_limit,
                label="Results",
            )
        button = gr.Button("Search")
        results = gr.Dataframe(headers=COLUMNS, interactive=False)
        query.submit(run_search, inputs=[query, year, limit], outputs=results)
        button.click(run_search, inputs=[query, year, limit], outputs=results)
    return demo
