"""FastAPI server presenting a local two-player Othello board in the browser."""
from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, ValidationError

from .game import BOARD_SIZE
from .turns import TurnController

logger = logging.getLogger(__name__)

app = FastAPI(title="Reversi")

STATIC_DIR = Path(__file__).resolve().parent / "static"


class MoveRequest(BaseModel):
    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)


class SessionManager:
    """Owns the single game session and the displays watching it."""

    def __init__(self) -> None:
        self.controller = TurnController()
        # Open display connections (browser tabs showing the board).
        self.connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.append(websocket)
        logger.debug("Display connected (%d open)", len(self.connections))

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.connections:
            self.connections.remove(websocket)
        logger.debug("Display disconnected (%d open)", len(self.connections))

    async def broadcast(self, message: dict) -> None:
        for connection in list(self.connections):
            try:
                await connection.send_text(json.dumps(message))
            except (WebSocketDisconnect, RuntimeError):
                # Displays that have gone away are dropped.
                logger.warning("Dropping display that failed to receive an update")
                self.disconnect(connection)

    def state(self) -> Dict[str, Any]:
        return self.controller.snapshot().to_dict()

    def move(self, row: int, col: int) -> bool:
        return self.controller.attempt_move(row, col)

    def new_game(self) -> None:
        self.controller.reset()

    def dismiss_pass(self) -> None:
        self.controller.dismiss_pass()

    async def publish(self) -> Dict[str, Any]:
        """Broadcast the current state to every display and return it."""
        state = self.state()
        await self.broadcast({"type": "update", **state})
        return state


manager = SessionManager()


@app.get("/")
async def get_board() -> HTMLResponse:
    with open(STATIC_DIR / "index.html", "r", encoding="utf-8") as f:
        return HTMLResponse(f.read())


@app.get("/state")
async def get_state() -> dict:
    return manager.state()


@app.post("/move")
async def post_move(move: MoveRequest) -> dict:
    accepted = manager.move(move.row, move.col)
    if accepted:
        state = await manager.publish()
    else:
        state = manager.state()
    return {"accepted": accepted, **state}


@app.post("/new")
async def post_new_game() -> dict:
    manager.new_game()
    return await manager.publish()


@app.post("/dismiss")
async def post_dismiss() -> dict:
    manager.dismiss_pass()
    return await manager.publish()


def _parse_move(msg: dict) -> Optional[MoveRequest]:
    try:
        return MoveRequest(row=msg.get("row"), col=msg.get("col"))
    except ValidationError:
        return None


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await manager.connect(websocket)
    await websocket.send_text(json.dumps({"type": "init", **manager.state()}))
    try:
        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                msg = None
            if not isinstance(msg, dict):
                await websocket.send_text(json.dumps({"type": "error", "message": "Malformed message"}))
                continue
            action = msg.get("action")
            if action == "move":
                move = _parse_move(msg)
                if move is not None and manager.move(move.row, move.col):
                    await manager.publish()
                else:
                    await websocket.send_text(json.dumps({"type": "error", "message": "Invalid move"}))
            elif action == "new":
                manager.new_game()
                await manager.publish()
            elif action == "dismiss":
                manager.dismiss_pass()
                await manager.publish()
            else:
                await websocket.send_text(json.dumps({"type": "error", "message": "Unknown action"}))
    except WebSocketDisconnect:
        manager.disconnect(websocket)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Serve a local Othello board")
    parser.add_argument("--host", default=os.environ.get("REVERSI_HOST", "127.0.0.1"))
    parser.add_argument(
        "--port", type=int, default=int(os.environ.get("REVERSI_PORT", "8000"))
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("REVERSI_LOG_LEVEL", "info"),
        choices=["critical", "error", "warning", "info", "debug"],
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
