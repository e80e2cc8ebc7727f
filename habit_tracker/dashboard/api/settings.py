from fastapi import APIRouter, Depends

from habit_tracker.core.models import COLOR_PALETTE, EMOJI_CHOICES
from habit_tracker.database.preferences import PreferenceStore
from habit_tracker.shared.models import ChoicesResponse, ThemeResponse, ThemeUpdateRequest
from habit_tracker.ui.themes import get_theme
from ..dependencies import get_preference_store

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/theme", response_model=ThemeResponse)
def read_theme(store: PreferenceStore = Depends(get_preference_store)):
    theme = store.get_theme()
    return ThemeResponse(theme=theme, descriptor=get_theme(theme))


@router.put("/theme", response_model=ThemeResponse)
def update_theme(
    request: ThemeUpdateRequest,
    store: PreferenceStore = Depends(get_preference_store)
):
    store.set_theme(request.theme.value)
    return ThemeResponse(theme=request.theme, descriptor=get_theme(request.theme.value))


@router.get("/choices", response_model=ChoicesResponse)
def read_choices():
    """Эмодзи и цвета для формы привычки"""
    return ChoicesResponse(emoji=EMOJI_CHOICES, colors=COLOR_PALETTE)
