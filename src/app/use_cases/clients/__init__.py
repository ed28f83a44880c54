"""
Client Use Cases
"""

from .create_client_use_case import CreateClientUseCase
from .delete_client_use_case import DeleteClientUseCase
from .dtos import ClientResponse, DeleteClientResponse
from .get_client_use_case import GetClientUseCase
from .list_client_jobs_use_case import ListClientJobsUseCase
from .list_clients_use_case import ListClientsUseCase
from .update_client_use_case import UpdateClientUseCase

__all__ = [
    "CreateClientUseCase",
    "ListClientsUseCase",
    "GetClientUseCase",
    "UpdateClientUseCase",
    "DeleteClientUseCase",
    "ListClientJobsUseCase",
    "ClientResponse",
    "DeleteClientResponse",
]
