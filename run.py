from datetime import datetime, timezone
import time

from dotenv import load_dotenv
import hydra
from hydra.utils import get_class, instantiate
from loguru import logger
from omegaconf import DictConfig

from detevo import EngineConfig, Evolution, GenerationRecord
from detevo.config import build_config
from detevo.evolution.engine import GenerationView
from detevo.utils.logger_setup import setup_logger


def _stop_predicate(cfg: DictConfig):
    target = cfg.target_fitness
    generations = cfg.generations

    def predicate(record: GenerationRecord) -> bool:
        if target is not None and record.best is not None and record.best.fitness >= target:
            return True
        return generations is not None and record.generation >= generations

    return predicate


def run_experiment(cfg: DictConfig) -> None:
    start_time = time.time()

    logger.info("=" * 80)
    logger.info("detevo Evolution Experiment")
    logger.info("=" * 80)
    logger.info(f"Problem: {cfg.problem.name}")
    logger.info(f"Start time: {datetime.now(timezone.utc).isoformat()}")

    if cfg.generations is None and cfg.target_fitness is None:
        raise ValueError("Set generations and/or target_fitness; the run has no other stop condition")

    solution_type = get_class(cfg.problem.solution)
    algorithm = instantiate(cfg.algorithm)
    hall_of_fame = instantiate(cfg.hall_of_fame)
    engine_config = build_config(
        EngineConfig,
        seed=cfg.seed,
        reset_period=cfg.reset_period,
        max_workers=cfg.max_workers,
    )

    evolution = Evolution(solution_type, algorithm, hall_of_fame, engine_config)
    logger.info(f"Seed: {evolution.seed} (rerun with seed={evolution.seed} to reproduce)")

    report_every = cfg.report_every

    def report(view: GenerationView) -> None:
        if view.generation % report_every == 0 or view.record.reset:
            best = view.record.best
            logger.info(
                "gen {:>6} | best {} | fitness {}{}",
                view.generation,
                best.solution if best is not None else "-",
                best.fitness if best is not None else "-",
                " | reset" if view.record.reset else "",
            )

    log = evolution.run_until_with(_stop_predicate(cfg), report)

    best = log.last.best
    logger.info("")
    logger.info(f"Generations: {log.last.generation}")
    logger.info(f"Best solution: {best.solution} (fitness {best.fitness}, found in generation {best.generation})")
    if cfg.log_json is not None:
        with open(cfg.log_json, "w", encoding="utf-8") as fh:
            fh.write(log.to_json(indent=2))
        logger.info(f"Run log written to {cfg.log_json}")

    duration = time.time() - start_time
    logger.info(f"Total experiment duration: {duration:.2f} seconds")
    logger.info("=" * 80)


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entrypoint with Hydra configuration management."""
    load_dotenv()

    log_file_path = setup_logger(
        log_dir=cfg.logging.log_dir,
        level=cfg.logging.level,
        rotation=cfg.logging.rotation,
        retention=cfg.logging.retention,
    )
    logger.info(
        "Experiment working directory: {}.",
        hydra.core.hydra_config.HydraConfig.get().runtime.output_dir,
    )
    logger.info(f"Log file: {log_file_path}")
    run_experiment(cfg)


if __name__ == "__main__":
    main()
