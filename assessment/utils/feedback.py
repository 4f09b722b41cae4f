"""
Per-option feedback helpers
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

from assessment.utils.scoring import option_is_correct


def has_rich_text_content(content: Any) -> bool:
    """
    True if feedback content carries any visible text

    Content is either a plain string or an editor document whose nodes nest
    under "root" / "children" and carry "text".
    """
    if isinstance(content, str):
        return bool(content.strip())

    if not isinstance(content, dict):
        return False

    root = content.get("root", content)
    children = root.get("children") if isinstance(root, dict) else None
    if not isinstance(children, list) or not children:
        return False

    return any(_node_has_text(child) for child in children)


def _node_has_text(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    text = node.get("text")
    if isinstance(text, str) and text.strip():
        return True
    children = node.get("children")
    if isinstance(children, list):
        return any(_node_has_text(child) for child in children)
    return False


def selected_index(entry: Any) -> Optional[int]:
    """Stored selections are {"option_index": n}, older rows may hold a bare n"""
    if isinstance(entry, dict):
        entry = entry.get("option_index", entry.get("optionIndex"))
    if isinstance(entry, bool) or not isinstance(entry, int):
        return None
    return entry


def option_feedback(option: Dict[str, Any], option_index: int,
                    only_type: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten one option's non-empty feedback entries"""
    items = []
    entries = option.get("feedback") if isinstance(option, dict) else None
    if not isinstance(entries, list):
        return items

    default_type = "correct" if option_is_correct(option) else "incorrect"
    for entry in entries:
        if not isinstance(entry, dict) or not has_rich_text_content(entry.get("content")):
            continue
        feedback_type = entry.get("feedback_type") or default_type
        if only_type and feedback_type != only_type:
            continue
        items.append({
            "option_index": option_index,
            "feedback_type": feedback_type,
            "content": entry.get("content"),
        })
    return items


def collect_feedback(
    options: Sequence[Dict[str, Any]],
    selected_options: Sequence[Any],
    is_correct: bool
) -> Tuple[List[Dict[str, Any]], List[Any]]:
    """
    Collect feedback for an answer

    Selected options contribute all their feedback. A correct answer also
    picks up "correct" feedback from correct options that were not selected.

    Returns:
        Tuple of (feedback_items, out_of_range_indices)
    """
    options = options if isinstance(options, list) else []
    items = []
    out_of_range = []
    collected = set()

    for entry in selected_options or []:
        index = selected_index(entry)
        if index is None or index < 0 or index >= len(options):
            out_of_range.append(entry)
            continue
        if index in collected:
            continue
        collected.add(index)
        items.extend(option_feedback(options[index], index))

    if is_correct:
        for index, option in enumerate(options):
            if index in collected or not option_is_correct(option):
                continue
            items.extend(option_feedback(option, index, only_type="correct"))

    return items, out_of_range
