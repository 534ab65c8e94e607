from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import pandas as pd

from hpd_graph.config import AppConfig
from hpd_graph.graph.builder import build_graph
from hpd_graph.graph.model import HpdGraph
from hpd_graph.graph.portfolios import Portfolio, PortfolioMap
from hpd_graph.io.read import load_contacts, load_registrations
from hpd_graph.preprocess.contacts import filter_contacts
from hpd_graph.registrations import RegistrationIndex
from hpd_graph.synonyms import Synonyms

LOGGER = logging.getLogger(__name__)


class PortfolioNotFoundError(LookupError):
    def __init__(self, search: str) -> None:
        super().__init__(f"Unable to find a match for the name '{search}'.")
        self.search = search


@dataclass(frozen=True)
class HpdDataset:
    registrations: RegistrationIndex
    graph: HpdGraph
    portfolios: PortfolioMap

    def portfolio_for_name(self, search: str) -> tuple[str, Portfolio]:
        """Resolve ``search`` to a name node and return its label and portfolio."""
        node = self.graph.find_name(search)
        if node is None:
            raise PortfolioNotFoundError(search)
        portfolio = self.portfolios.for_node(node)
        if portfolio is None:  # pragma: no cover
            raise PortfolioNotFoundError(search)
        return self.graph.label(node), portfolio

    def building_id_for_registration(self, registration_id: int) -> str:
        return self.registrations.building_id(registration_id) or ""


def build_dataset(
    contacts: pd.DataFrame,
    registrations: pd.DataFrame,
    config: AppConfig,
    today: date | None = None,
) -> HpdDataset:
    registration_index = RegistrationIndex.from_frame(
        registrations,
        max_expiration_age_days=config.registrations.max_expiration_age_days,
        today=today,
    )
    accepted = filter_contacts(
        contacts,
        registration_index,
        include_corps=config.names.include_corps,
        synonyms=Synonyms.from_path(config.names.synonyms_path),
    )
    graph = build_graph(accepted)
    portfolios = PortfolioMap.from_graph(graph)
    return HpdDataset(registrations=registration_index, graph=graph, portfolios=portfolios)


def load_dataset(config: AppConfig, today: date | None = None) -> HpdDataset:
    if not config.inputs.contacts_csv or not config.inputs.registrations_csv:
        raise ValueError("inputs.contacts_csv and inputs.registrations_csv must be set")
    registrations_path = Path(config.inputs.registrations_csv)
    contacts_path = Path(config.inputs.contacts_csv)
    LOGGER.info("Reading registrations from %s", registrations_path)
    registrations = load_registrations(registrations_path, config.columns.registrations)
    LOGGER.info("Reading registration contacts from %s", contacts_path)
    contacts = load_contacts(contacts_path, config.columns.contacts)
    return build_dataset(contacts, registrations, config=config, today=today)
