"""
/**
 * @file smarttranslate/controllers/proxy_controller.py
 * @description 代理控制器：翻译 / 分析 / 语音合成统一入口。
 */
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from smarttranslate.services.proxy_service import ProxyHandler


router = APIRouter()
handler = ProxyHandler()


@router.api_route("/api/translate", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def proxy(request: Request):
    body = await request.body() if request.method == "POST" else None
    # upstream calls block, keep them off the event loop
    result = await run_in_threadpool(handler.handle, request.method, body)
    if result.payload is None:
        return Response(status_code=result.status, headers=result.headers)
    return JSONResponse(status_code=result.status, content=result.payload, headers=result.headers)
