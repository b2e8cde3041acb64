"""
pipeline.py

The two modes of the tool:
- generate: embed labeled texts and persist them as a corpus
- query: embed one input, score it against a persisted corpus, rank
"""

from typing import List, NamedTuple, Optional

from embedscore import store
from embedscore.embeddings import EmbeddingProvider
from embedscore.errors import CorpusReadError, InvalidArgument
from embedscore.models import CorpusKind, Emotion, LabeledItem, Sentiment, SimilarityResult
from embedscore.similarity import conclude, rank, score


class QueryReport(NamedTuple):
    corpus: CorpusKind
    results: List[SimilarityResult]   # ranked, best first
    conclusion: Optional[Emotion]


def generate_review_embeddings(sentiment: Sentiment, provider: EmbeddingProvider, data_dir: str) -> List[LabeledItem]:
    """
    Embed every review title of one sentiment and overwrite its corpus file.
    """
    reviews = store.load_reviews(store.reviews_path(data_dir, sentiment))
    print(f"[generate] Embedding {len(reviews)} {sentiment.value} reviews...")

    items = []
    for review in reviews:
        embedding = provider.embed(review.title)
        items.append(LabeledItem(
            title=review.title,
            content=review.content,
            label=sentiment.value,
            embedding=embedding,
        ))

    store.store_corpus(store.review_embeddings_path(data_dir, sentiment), items, label_field="sentiment")
    return items


def generate_emotion_embeddings(provider: EmbeddingProvider, data_dir: str) -> List[LabeledItem]:
    """
    Embed the names of all six emotions in one batched call.
    """
    emotions = list(Emotion)
    print(f"[generate] Embedding {len(emotions)} emotions...")
    vectors = provider.embed_batch([e.display_name for e in emotions])

    items = [
        LabeledItem(title=emotion.display_name, label=emotion.value, embedding=vector)
        for emotion, vector in zip(emotions, vectors)
    ]
    store.store_corpus(store.emotion_embeddings_path(data_dir), items)
    return items


def load_review_corpus(data_dir: str) -> List[LabeledItem]:
    """
    Positive reviews then negative reviews, labeled POSITIVE-1, POSITIVE-2, ... NEGATIVE-1, ...
    """
    corpus = []
    for sentiment in (Sentiment.POSITIVE, Sentiment.NEGATIVE):
        items = store.load_corpus(store.review_embeddings_path(data_dir, sentiment))
        corpus.extend(
            item.model_copy(update={"label": f"{sentiment.value.upper()}-{index}"})
            for index, item in enumerate(items, start=1)
        )
    return corpus


def load_emotion_corpus(data_dir: str) -> List[LabeledItem]:
    path = store.emotion_embeddings_path(data_dir)
    corpus = []
    for item in store.load_corpus(path):
        try:
            emotion = Emotion.parse(item.label)
        except InvalidArgument as e:
            raise CorpusReadError(f"{path}: {e}") from e
        corpus.append(item.model_copy(update={"label": emotion}))
    return corpus


def corpus_paths(corpus: CorpusKind, data_dir: str) -> List[str]:
    """Files a query against `corpus` reads."""
    if corpus is CorpusKind.EMOTIONS:
        return [store.emotion_embeddings_path(data_dir)]
    return [store.review_embeddings_path(data_dir, s) for s in (Sentiment.POSITIVE, Sentiment.NEGATIVE)]


def load_corpus(corpus: CorpusKind, data_dir: str) -> List[LabeledItem]:
    if corpus is CorpusKind.EMOTIONS:
        return load_emotion_corpus(data_dir)
    return load_review_corpus(data_dir)


def query(text: str, provider: EmbeddingProvider, corpus: CorpusKind, data_dir: str) -> QueryReport:
    """
    Score `text` against the chosen corpus.

    Returns a QueryReport whose results are ranked best first.
    """
    if not text or not text.strip():
        raise InvalidArgument("Please provide a string to embed.")

    # load first so a missing corpus fails before spending an API call
    items = load_corpus(corpus, data_dir)
    embedding = provider.embed(text)
    results = rank(score(embedding, items))
    return QueryReport(corpus=corpus, results=results, conclusion=conclude(results))
