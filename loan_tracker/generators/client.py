"""Client generator."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterator

from loan_tracker.generators.base import BaseGenerator
from loan_tracker.models import Client


class ClientGenerator(BaseGenerator):
    """Generate synthetic borrowers."""

    COLLATERAL = [
        "Moto Honda CG 160",
        "Celular Samsung",
        "Notebook Dell",
        "Televisão 50 polegadas",
        "Cordão de ouro",
        "",
    ]

    def generate(self, now: datetime | None = None) -> Client:
        """Generate a single client registered within the last two years.

        Returns
        -------
        Client
            Generated client.
        """
        now = now or datetime.now()
        return Client(
            client_id=self.new_id(),
            name=self.fake.name(),
            phone=self.fake.cellphone_number(),
            created_at=now - timedelta(days=self.random.randint(0, 730)),
            address=self.fake.street_address(),
            profession=self.fake.job(),
            cpf=self.fake.cpf(),
            collateral=self.random.choice(self.COLLATERAL),
        )

    def generate_batch(self, count: int, now: datetime | None = None) -> Iterator[Client]:
        """Generate multiple clients.

        Parameters
        ----------
        count : int
            Number of clients to generate.

        Yields
        ------
        Client
            Generated clients.
        """
        for _ in range(count):
            yield self.generate(now)
