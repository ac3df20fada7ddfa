"""
DTOs (Data Transfer Objects) de la capa de aplicacion.
"""
from .sync_dto import ClientDTO, RunHistoryResponseDTO, RunResultDTO, RunSummaryDTO, ScheduleDTO

__all__ = ["ClientDTO", "RunHistoryResponseDTO", "RunResultDTO", "RunSummaryDTO", "ScheduleDTO"]
