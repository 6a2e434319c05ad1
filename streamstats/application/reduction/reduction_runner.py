# streamstats/application/reduction/reduction_runner.py
import logging
import os
from typing import Any, Dict, Optional, Sequence

from streamstats.application.reduction.parallel_reducer import ParallelReducer
from streamstats.domain.stats.entities.online_stat import OnlineStat
from streamstats.domain.stats.factories.stat_factory import StatFactory
from streamstats.infrastructure.concurrency.task_executor import ExecutionMode, TaskExecutor
from streamstats.infrastructure.config.loaders.yaml_loader import YamlConfigLoader
from streamstats.infrastructure.config.validators.schema_validator import SchemaValidator
from streamstats.infrastructure.logging.log_manager import initialize_logging

SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "config", "schemas", "reduction_schema.json"
)


class ReductionRunner:
    """
    Runs a reduction job described by configuration.

    A job names the statistic to compute and how to execute it:

        execution:
          mode: multiprocess
          max_workers: 4
          shards: 8
        statistic:
          type: series
          stats: [{type: mean}, {type: variance}]
    """
    def __init__(self, config: Dict[str, Any], stat_factory: Optional[StatFactory] = None):
        """
        Initialize the runner from an already loaded and validated configuration.

        Args:
            config: Job configuration (see class docstring)
            stat_factory: Optional statistic factory (created if not provided)
        """
        self.logger = logging.getLogger("application.reduction.runner")
        self.config = config
        self.stat_factory = stat_factory or StatFactory()

        execution = config.get("execution", {})
        self.mode = ExecutionMode.from_name(execution.get("mode", "sequential"))
        self.max_workers = execution.get("max_workers")
        self.shards = execution.get("shards", 1)

        self.prototype = self.stat_factory.create_stat(config["statistic"])
        self.reducer = ParallelReducer(TaskExecutor(self.mode, self.max_workers))

        self.logger.info(
            f"Reduction runner ready: {type(self.prototype).__name__}, "
            f"mode={self.mode.name}, shards={self.shards}"
        )

    @classmethod
    def from_file(cls, config_path: str, config_loader: Optional[YamlConfigLoader] = None,
                  setup_logging: bool = True) -> "ReductionRunner":
        """
        Load a job configuration file, validate it and build a runner.

        Args:
            config_path: Path to the YAML job configuration
            config_loader: Optional loader (a validating loader is created if not provided)
            setup_logging: Initialize logging from the file's 'logging' section

        Returns:
            Configured ReductionRunner

        Raises:
            ConfigError: If the file is missing, unparsable or invalid
        """
        loader = config_loader or YamlConfigLoader(SchemaValidator())
        config = loader.load_file(config_path, schema_path=SCHEMA_PATH, apply_defaults=True)

        if setup_logging:
            initialize_logging(config.get("logging"))

        return cls(config)

    def run(self, data: Sequence) -> OnlineStat:
        """
        Compute the configured statistic over `data`.

        Args:
            data: Sequence of observations

        Returns:
            Merged statistic
        """
        return self.reducer.reduce(self.prototype, data, self.shards)
