# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response

from authgate.interfaces.http.middleware.token_authentication import current_principal
from authgate.shared.logging import logger


class AdminController:
    """Admin-only endpoints; access is enforced by the authorization interceptor."""

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("admin", __name__)
        bp.add_url_rule("/admin", view_func=self.index, methods=["GET"])
        return bp

    def index(self) -> Response:
        principal = current_principal()
        logger.debug(f"admin.index: served username={principal.username if principal else None}")
        return Response("admin Controller", mimetype="text/plain")
