import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.staticfiles import StaticFiles

from DocSeeker.tfidf_search.corpus import Corpus
from DocSeeker.tfidf_search.tfidf_search import search

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


def create_app(corpus: Corpus, static_dir: str = STATIC_DIR) -> FastAPI:
    """
    Build the web application serving searches over a corpus.

    The corpus is kept on app.state and only read by the handlers.

    Args:
        corpus: Loaded corpus to search
        static_dir: Directory served at "/" (skipped if it does not exist)

    Returns:
        FastAPI application
    """
    app = FastAPI(title="DocSeeker")
    app.state.corpus = corpus

    @app.get("/search")
    def search_documents(request: Request, query: Optional[str] = Query(None)):
        if not query:
            raise HTTPException(status_code=400, detail="Query is empty.")
        results = search(request.app.state.corpus, query)
        return {
            "length": len(results),
            "results": [{"path": result.path, "score": result.score} for result in results]
        }

    @app.api_route("/search", methods=["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    def unsupported_method():
        raise HTTPException(status_code=404, detail="Method is not supported.")

    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


def parse_address(address, default_host, default_port):
    """
    Split an address of the form host:port, :port or host.

    Returns:
        Tuple of (host, port)

    Raises:
        ValueError: If the port is not a number
    """
    if not address:
        return default_host, default_port
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, default_port
    return host or default_host, int(port)


def serve(corpus: Corpus, host="127.0.0.1", port=6969, static_dir=STATIC_DIR):
    import uvicorn

    app = create_app(corpus, static_dir=static_dir)
    print(f"Starting server at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
