# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response


class MainController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("main", __name__)
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        return bp

    def index(self) -> Response:
        return Response("Main Controller", mimetype="text/plain")
