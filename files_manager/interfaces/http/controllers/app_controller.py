# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from files_manager.application.use_cases.app.get_stats import GetStatsUseCase
from files_manager.application.use_cases.app.get_status import GetStatusUseCase
from files_manager.infrastructure.event_loop import EventLoopManager
from files_manager.infrastructure.observability import render_metrics
from files_manager.interfaces.http.dto.app import StatsDTO, StatusDTO


class AppController:
    def __init__(
        self,
        *,
        status_use_case: GetStatusUseCase,
        stats_use_case: GetStatsUseCase,
        event_loop: EventLoopManager,
        metrics_enabled: bool = True,
    ) -> None:
        self._status_use_case = status_use_case
        self._stats_use_case = stats_use_case
        self._loop = event_loop
        self._metrics_enabled = metrics_enabled

    def status(self) -> tuple[Response, int]:
        payload = StatusDTO(**self._status_use_case.execute())
        return jsonify(payload.model_dump()), 200

    def stats(self) -> tuple[Response, int]:
        counts = self._loop.run(self._stats_use_case.execute())
        return jsonify(StatsDTO(**counts).model_dump()), 200

    def metrics(self) -> Response:
        body, content_type = render_metrics()
        return Response(body, content_type=content_type)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("app", __name__)
        bp.add_url_rule("/status", view_func=self.status, methods=["GET"])
        bp.add_url_rule("/stats", view_func=self.stats, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp
