from fastapi import FastAPI

from embedscore.routes.similarity import router as similarity_router
from embedscore.utils import query_response_cache

app = FastAPI(title="embedscore - embedding similarity")

app.include_router(similarity_router)

# Cached responses belong to the corpus files present at startup
query_response_cache.clear()


@app.get("/")
def read_root():
    return {"message": "embedscore is running. POST /similarity with {'text': ..., 'corpus': 'reviews'|'emotions'}"}


@app.get("/health")
def health():
    return {"status": "ok"}
