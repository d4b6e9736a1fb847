from __future__ import annotations

from typing import Any, Callable, Dict, TypeVar

import streamlit as st

T = TypeVar("T")

_VIEW_PREFIX = "view:"
_CURRENT_PATH_KEY = "_current_path"


def ensure_defaults(defaults: Dict[str, Any]) -> None:
    """Ensure session_state has default values for keys."""
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


def enter_view(path: str) -> None:
    """Drop the state of every other view when the user navigates.

    View data lives only as long as the view is shown, like a component mount.
    """
    if st.session_state.get(_CURRENT_PATH_KEY) == path:
        return
    for k in [k for k in st.session_state.keys() if str(k).startswith(_VIEW_PREFIX)]:
        del st.session_state[k]
    st.session_state[_CURRENT_PATH_KEY] = path


def view_state(key: str, loader: Callable[[], T]) -> T:
    """Load once per view mount; later reruns reuse the (locally patched) value."""
    full = _VIEW_PREFIX + key
    if full not in st.session_state:
        st.session_state[full] = loader()
    return st.session_state[full]


def reload_view(key: str) -> None:
    st.session_state.pop(_VIEW_PREFIX + key, None)


def set_view(key: str, value: Any) -> None:
    st.session_state[_VIEW_PREFIX + key] = value


def peek_view(key: str, default: Any = None) -> Any:
    return st.session_state.get(_VIEW_PREFIX + key, default)
