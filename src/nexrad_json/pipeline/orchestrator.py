"""Fan-out/join orchestration over elevation sweeps.

Selects which elevations to convert, assembles each one on a fixed thread
pool, then writes each collection on the same pool size. The two phases are
separated by a join: no writer starts until every assembly task has finished.
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List

from nexrad_json.contracts import MissingElevationError
from nexrad_json.pipeline.assembler import scan_to_feature_collection
from nexrad_json.pipeline.features import FeatureCollection, write_collection

if TYPE_CHECKING:
    from nexrad_json.radar.transforms import TransformChain
    from nexrad_json.radar.volume import RadarVolume
    from nexrad_json.schemas import InternalConfig

__all__ = ['ElevationOrchestrator']

logger = logging.getLogger(__name__)


class ElevationOrchestrator:
    """Drive assembly and output for the selected elevations.

    **Modes:**

    - **Single** (``elevations_til == -1``): convert exactly
      ``config.scan.elevation``. Missing index raises MissingElevationError.

    - **Batch** (``elevations_til >= 0``): convert every elevation index
      ``<= elevations_til``. Higher indices are never touched.

    **Phases:**

    1. Assembly: one task per elevation. Tasks share the read-only
       TransformChain; each returns its own FeatureCollection.
    2. Write: one task per collection, each owning one output file.

    Both phases are fail-fast. The first error from any task cancels the
    tasks not yet started and is re-raised once running tasks finish.

    Example usage::

        chain = TransformChain.from_location(*volume.site_location(), config)
        orch = ElevationOrchestrator(config, volume, chain)
        paths = orch.run()
    """

    def __init__(self, config: "InternalConfig", volume: "RadarVolume", chain: "TransformChain"):
        """Initialize orchestrator.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        volume : RadarVolume
            Decoded radials keyed by elevation index.
        chain : TransformChain
            Transform handles for the radar site, shared by all tasks.
        """
        self.config = config
        self.volume = volume
        self.chain = chain
        self.threads = config.processing.threads

    def select_elevations(self) -> List[int]:
        """Elevation indices to process, in ascending order."""
        scan = self.config.scan

        if self.config.batch_mode:
            selected = [i for i in self.volume.indices() if i <= scan.elevations_til]
            if not selected:
                logger.warning("No elevations <= %d in volume (available: %s)",
                               scan.elevations_til, self.volume.indices())
            return selected

        if scan.elevation not in self.volume:
            raise MissingElevationError(
                f"Elevation {scan.elevation} not in volume (available: {self.volume.indices()})"
            )
        return [scan.elevation]

    def assemble(self, indices: List[int]) -> Dict[int, FeatureCollection]:
        """Assembly phase: one FeatureCollection per elevation index."""
        scan = self.config.scan
        tasks = {
            index: partial(scan_to_feature_collection, self.volume[index], self.chain,
                           scan.product, scan.minimum)
            for index in indices
        }
        return self._run_phase("assembly", tasks)

    def write(self, collections: Dict[int, FeatureCollection]) -> Dict[int, Path]:
        """Write phase: one output file per collection."""
        tasks = {
            index: partial(write_collection, collection, self.config.output_path(index),
                           self.config.output.indent)
            for index, collection in collections.items()
        }
        return self._run_phase("write", tasks)

    def run(self) -> Dict[int, Path]:
        """Select, assemble, join, write, join.

        Returns
        -------
        dict of int to Path
            Output file per processed elevation.
        """
        indices = self.select_elevations()
        logger.info("=" * 60)
        logger.info("Converting %s elevation(s) %s with %d thread(s)",
                    self.config.scan.product, indices, self.threads)
        logger.info("=" * 60)

        collections = self.assemble(indices)
        for index in sorted(collections):
            logger.info("✓ Elevation %d: %d feature(s)", index, len(collections[index]))

        paths = self.write(collections)
        logger.info("Wrote %d file(s)", len(paths))
        return paths

    def _run_phase(self, name: str, tasks: Dict[int, Callable]) -> Dict[int, object]:
        """Run one fan-out/join phase and return results keyed by elevation."""
        if not tasks:
            return {}

        with ThreadPoolExecutor(max_workers=self.threads,
                                thread_name_prefix=f"nexrad-{name}") as executor:
            futures = {executor.submit(task): index for index, task in tasks.items()}
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)

            failed = sorted(
                (f for f in done if f.exception() is not None),
                key=lambda f: futures[f],
            )
            if failed:
                for future in pending:
                    future.cancel()
                error = failed[0].exception()
                logger.error("%s failed for elevation %d: %s", name.capitalize(), futures[failed[0]], error)
                raise error

        return {futures[f]: f.result() for f in sorted(done, key=lambda f: futures[f])}
