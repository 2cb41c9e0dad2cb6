"""Image gallery for the property detail page."""

from __future__ import annotations

from typing import Callable, List

import streamlit as st


def clamp_image_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(count - 1, index))


def render_gallery(property_id: int, images: List[str], to_url: Callable[[str], str], title: str) -> None:
    if not images:
        st.info("No images available for this property.")
        return

    state_key = f"gallery_{property_id}"
    index = clamp_image_index(st.session_state.get(state_key, 0), len(images))
    st.session_state[state_key] = index

    st.image(to_url(images[index]), caption=f"{title} · {index + 1} / {len(images)}", width="stretch")

    prev_col, _, next_col = st.columns([1, 4, 1])
    with prev_col:
        st.button(
            "‹ Prev",
            key=f"{state_key}_prev",
            disabled=index == 0,
            on_click=lambda: st.session_state.update({state_key: index - 1}),
        )
    with next_col:
        st.button(
            "Next ›",
            key=f"{state_key}_next",
            disabled=index >= len(images) - 1,
            on_click=lambda: st.session_state.update({state_key: index + 1}),
        )

    if len(images) > 1:
        thumbs = st.columns(min(len(images), 5))
        for idx, path in enumerate(images):
            with thumbs[idx % len(thumbs)]:
                st.image(to_url(path), width="stretch")
                st.button(
                    f"View {idx + 1}",
                    key=f"{state_key}_thumb_{idx}",
                    disabled=idx == index,
                    on_click=lambda i=idx: st.session_state.update({state_key: i}),
                )
