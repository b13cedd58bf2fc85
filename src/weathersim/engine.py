"""Generation engine: per-location Markov walks over days, sampled sensors, serialized records."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional
import logging

from .core.conditions import SensorType, WeatherCondition
from .core.errors import MissingSensorBindingError
from .core.rng import RNG
from .core.timebase import Timebase
from .io.simulation import write_simulation
from .io.training import write_training
from .io.write_parquet import write_records_parquet
from .model.locations import GeoLocation, take_locations
from .model.sensors import SensorModel
from .settings import RunConfig

logger = logging.getLogger(__name__)

TRAINING_FILE = "training.dat"
SIMULATION_FILE = "simulation.dat"
SIMULATION_PARQUET_FILE = "simulation.parquet"

RecordWriter = Callable[[Iterable["GeneratedRecord"], Path], int]


@dataclass(frozen=True)
class GeneratedRecord:
    """One simulated location-day."""
    location_index: int
    location: GeoLocation
    date: datetime
    condition: WeatherCondition
    observations: Dict[SensorType, float]

    @property
    def day_of_year(self) -> int:
        return self.date.timetuple().tm_yday


class GenerationEngine:
    """Drives the day-by-day weather walk for every location and hands records to writers."""

    def __init__(
        self,
        config: RunConfig,
        locations: Iterable[GeoLocation],
        sensor_models: Mapping[SensorType, SensorModel],
        rng: Optional[RNG] = None,
    ):
        """Initialize the engine.

        Args:
            config: Run configuration
            locations: Ordered location source; the first ``config.locations`` are used
            sensor_models: One sensor model per SensorType
            rng: Root random source (default: seeded from ``config.seed``)

        Raises:
            MissingSensorBindingError: if a sensor type has no model
            InsufficientLocationSamplesError: if the source is too short
        """
        missing = [st.name for st in SensorType if st not in sensor_models]
        if missing:
            raise MissingSensorBindingError(f"No sensor model for: {', '.join(missing)}")

        self.config = config
        self.sensor_models = {st: sensor_models[st] for st in SensorType}
        self.locations: List[GeoLocation] = take_locations(locations, config.locations)
        self.rng = rng if rng is not None else RNG(config.seed)

        logger.info(
            f"Generation engine ready: run {config.run_id}, "
            f"{len(self.locations)} locations x {config.days} days from {config.start_time.isoformat()}"
        )

    @property
    def run_dir(self) -> Path:
        return self.config.run_dir

    def walk_location(self, index: int, location: GeoLocation, rng: RNG) -> List[GeneratedRecord]:
        """Simulate one location's day sequence.

        The initial condition is a uniform draw and is never emitted; the first
        record already reflects one transition from it.
        """
        condition = location.transition.initial_condition(rng)
        records = []
        for day in Timebase(self.config.start_time, self.config.days).dates():
            condition = location.transition.sample_next(condition, rng)
            observations = {
                st: model.sample(condition, rng)
                for st, model in self.sensor_models.items()
            }
            records.append(GeneratedRecord(index, location, day, condition, observations))
        logger.debug(f"Location {index} simulated ({len(records)} days)")
        return records

    def iter_records(self) -> Iterator[GeneratedRecord]:
        """One full traversal over all locations, in location-index order.

        Each traversal spawns fresh per-location random streams, so repeated
        traversals draw independently while staying reproducible under a seed.
        """
        streams = self.rng.spawn(len(self.locations))
        indices = range(len(self.locations))
        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                # map() yields in submission order
                for records in pool.map(self.walk_location, indices, self.locations, streams):
                    yield from records
        else:
            for records in map(self.walk_location, indices, self.locations, streams):
                yield from records

    def generate(self, writer: RecordWriter, filename: str) -> Path:
        """Run a traversal and serialize it with ``writer`` under the run directory."""
        path = self.run_dir / filename
        n = writer(self.iter_records(), path)
        logger.info(f"Run {self.config.run_id}: {filename} complete ({n} entries)")
        return path

    def generate_training_data(self) -> Path:
        return self.generate(write_training, TRAINING_FILE)

    def generate_simulation_data(self) -> Path:
        return self.generate(write_simulation, SIMULATION_FILE)

    def generate_simulation_parquet(self) -> Path:
        return self.generate(write_records_parquet, SIMULATION_PARQUET_FILE)


def expected_line_counts(config: RunConfig) -> Dict[str, int]:
    """Line counts a complete run produces for each text output."""
    per_location_day = config.locations * config.days
    return {
        TRAINING_FILE: per_location_day * (1 + len(SensorType)),
        SIMULATION_FILE: per_location_day,
    }
