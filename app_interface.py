from abc import ABC, abstractmethod


class AppComponent(ABC):
    @abstractmethod
    async def run(self) -> None: ...
