"""FastAPI do catálogo de produtos e pedidos, persistidos em arquivos JSON.

Fluxo:
- Cada rota lê o arquivo JSON do seu store (`data.json` ou `orders.json`),
  altera a estrutura em memória, regrava o arquivo inteiro e responde em JSON.
- Cada store tem seu próprio lock: ciclos ler-modificar-gravar no mesmo arquivo
  não se intercalam (sem "lost update" dentro do processo).
- Arquivo inexistente é tratado como store vazio; arquivo corrompido gera 500.
- Erros sempre no formato `{"error": "<mensagem>"}`.
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .dependencies import get_catalog, get_order_book
from .router import router
from .storage import StoreError

# Carrega variáveis do .env (DATA_DIR, PORT, LOG_LEVEL etc.)
load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="Catálogo de Produtos e Pedidos", version="0.1.0")
app.include_router(router)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Converte HTTPException (400/404/405...) para `{"error": detail}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corpo que não é objeto JSON (ou PUT sem `newPrice`) vira 400."""
    logger.info("Requisição inválida em %s: %s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


@app.exception_handler(StoreError)
@app.exception_handler(OSError)
async def storage_error(request: Request, exc: Exception) -> JSONResponse:
    """Arquivo corrompido ou ilegível: 500 genérico, detalhe só no log."""
    logger.error("Falha de armazenamento em %s: %s", request.url.path, exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover
    logger.exception("Erro inesperado em %s", request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


@app.on_event("startup")
async def log_store_paths() -> None:
    """Loga onde estão os arquivos de dados na inicialização."""
    logger.info("Startup: produtos em %s", get_catalog().path)
    logger.info("Startup: pedidos em %s", get_order_book().path)


@app.get("/healthz")
def healthcheck() -> dict:
    """Endpoint de liveness simples."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "3000"))
    logger.info("Servidor escutando na porta %s", port)
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=port)
