# -*- coding: utf-8 -*-
import logging
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ngramspell.config import load_config
from ngramspell.corrector import Corrector
from ngramspell.errors import SpellModelError
from ngramspell.model import SpellModel
from ngramspell.normalize import tokenize

logger = logging.getLogger("ngramspell.service")

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

CFG = load_config()
MODEL_PATH = Path(CFG["service"]["model_path"])
MAX_SUGGESTIONS = CFG["output"]["suggestions"]

app = FastAPI(title="ngramspell correction service")

# Model loaded once; the service still starts without it and answers 503
corrector: Optional[Corrector] = None
try:
    corrector = Corrector.from_config(SpellModel.load(MODEL_PATH, CFG["model"]["encoding"]), CFG)
except (SpellModelError, OSError) as exc:
    logger.warning("No spell model loaded from %s: %s", MODEL_PATH, exc)
    corrector = None


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class Suggestion(BaseModel):
    word: str
    score: float


class CorrectIn(BaseModel):
    context: List[str] = Field(..., description="Preceding tokens followed by the token to correct")


class CorrectOut(BaseModel):
    token: str
    in_lexicon: bool
    suggestions: List[Suggestion]


class SpellIn(BaseModel):
    text: str


class SpellOut(BaseModel):
    original: str
    corrected: str
    suggestions: Dict[str, List[str]]


def _require_corrector() -> Corrector:
    if corrector is None:
        raise HTTPException(status_code=503, detail="spell model not loaded")
    return corrector


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {
        "status": "ok",
        "model_ready": corrector is not None,
        "ngram": corrector.model.order if corrector is not None else None,
        "words": len(corrector.lexicon) if corrector is not None else 0,
    }


@app.post("/correct", response_model=CorrectOut)
def correct(payload: CorrectIn):
    """Ranked suggestions for the last token of `context`."""
    cor = _require_corrector()
    if not payload.context:
        raise HTTPException(status_code=422, detail="context must contain at least one token")
    token = payload.context[-1]
    ranked = cor.correct_word_in_context(payload.context)[:MAX_SUGGESTIONS]
    return {
        "token": token,
        "in_lexicon": cor.lexicon.contains(token),
        "suggestions": [{"word": w, "score": s} for w, s in ranked],
    }


@app.post("/check_spelling", response_model=SpellOut)
def check_spelling(payload: SpellIn):
    """
    Tokenize the text, replace every token by its best candidate and list
    the alternatives for tokens that were changed or are unknown.
    """
    cor = _require_corrector()
    text = payload.text or ""

    tokens: List[str] = []
    suggestions: Dict[str, List[str]] = {}
    for tok, ranked in cor.correct_tokens(tokenize(text)):
        best = ranked[0][0] if ranked else tok
        tokens.append(best)
        if best != tok or not cor.lexicon.contains(tok):
            suggestions[tok] = [w for w, _ in ranked[:MAX_SUGGESTIONS]]

    return {
        "original": text,
        "corrected": " ".join(tokens),
        "suggestions": suggestions,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        workers=1,
    )
