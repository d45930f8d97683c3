"""
Incremental build controller.

Runs the pipeline for one configuration: parse the schema, decide via
the persisted hash marker whether anything changed, generate every
artifact, write them, and record the new hash. The marker is written
last so an interrupted or failed run is always retried.
"""

import hashlib
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from .core.config import CodegenConfig
from .core.exceptions import CodegenError, GenerationError
from .core.generator import (
    Artifact,
    ArtifactRenderer,
    GenerationContext,
    GenerationResult,
)
from .core.naming import package_for
from .core.parser import SchemaParser, read_schema_bytes
from .core.schema import SchemaModel
from .core.templates import create_template_engine
from .core.types import TypeMapper
from .logging_config import RunLogger, get_logger
from .registry import GeneratorRegistry, get_registry

logger = get_logger(__name__)

HASH_MARKER_NAME = ".schemagen-hash"


def compute_hash(schema_bytes: bytes, config: CodegenConfig) -> str:
    """Digest of the schema content plus every setting that affects output."""
    digest = hashlib.sha256()
    digest.update(schema_bytes)
    digest.update(b"\0")
    digest.update(config.fingerprint().encode("utf-8"))
    return digest.hexdigest()


def read_marker(output_dir: Path) -> Optional[str]:
    """Stored digest, or None when the marker is absent or unreadable."""
    marker = Path(output_dir) / HASH_MARKER_NAME
    if not marker.is_file():
        return None
    try:
        return marker.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.warning("Ignoring unreadable hash marker %s: %s", marker, e)
        return None


class CodegenController:
    """Orchestrates one generation run per call to :meth:`run`."""

    def __init__(
        self,
        config: CodegenConfig,
        registry: Optional[GeneratorRegistry] = None,
        parser: Optional[SchemaParser] = None,
        renderer: Optional[ArtifactRenderer] = None,
    ):
        self.config = config
        self.registry = registry or get_registry()
        self.parser = parser or SchemaParser()
        self.renderer = renderer

    def run(self) -> GenerationResult:
        """
        Execute the pipeline.

        Returns:
            ``generated`` with the artifact count, or ``skipped``

        Raises:
            ConfigError: Invalid configuration
            SchemaParseError: Missing, unreadable or malformed schema
            GenerationError: Any failure while generating or writing
        """
        run_log = RunLogger(logger, {"run_id": uuid.uuid4().hex[:8]})
        config = self.config

        config.validate()
        output_dir = Path(config.output_dir)

        schema_bytes = read_schema_bytes(config.schema_path)
        model = self.parser.parse_bytes(schema_bytes, source=str(config.schema_path))

        current_hash = compute_hash(schema_bytes, config)
        if config.skip_if_up_to_date:
            previous_hash = read_marker(output_dir)
            if previous_hash == current_hash:
                run_log.info("Schema unchanged, skipping generation (%s)", current_hash[:12])
                return GenerationResult.skipped()
            run_log.debug(
                "Hash changed: %s -> %s",
                previous_hash[:12] if previous_hash else "none",
                current_hash[:12],
            )

        try:
            artifacts = self.generate_artifacts(model, run_log)
            sources = self.render_artifacts(artifacts)
            self.write(output_dir, sources, current_hash, run_log)
        except CodegenError:
            raise
        except Exception as e:
            raise GenerationError(f"Code generation failed: {e}") from e

        run_log.info("Generated %d artifacts into %s", len(artifacts), output_dir)
        return GenerationResult.generated(len(artifacts))

    def generate_artifacts(self, model: SchemaModel, run_log=None) -> List[Artifact]:
        """Run every registered generator in order; fail on any module path clash."""
        run_log = run_log or logger
        config = self.config
        context = GenerationContext(
            mapper=TypeMapper(
                model,
                config.namespace,
                naming=config.naming_convention,
                scalar_overrides=config.scalar_mappings,
            ),
            namespace=config.namespace,
            naming=config.naming_convention,
            add_comments=config.add_comments,
        )

        artifacts: List[Artifact] = []
        for generator in self.registry.create_generators(context):
            produced = generator.generate(model)
            run_log.debug("%s generator produced %d artifacts", generator.kind, len(produced))
            artifacts.extend(produced)

        seen: Dict[str, Artifact] = {}
        for artifact in artifacts:
            clash = seen.get(artifact.module)
            if clash is not None:
                raise GenerationError(
                    f"'{artifact.graphql_name}' and '{clash.graphql_name}' both generate "
                    f"module {artifact.module}"
                )
            seen[artifact.module] = artifact

        return artifacts

    def render_artifacts(self, artifacts: List[Artifact]) -> Dict[Path, str]:
        """Source text per relative path, in artifact order."""
        renderer = self.renderer or ArtifactRenderer(
            create_template_engine(), add_comments=self.config.add_comments
        )
        sources: Dict[Path, str] = {}

        for artifact in artifacts:
            sources[Path(*artifact.relative_path.parts)] = renderer.render(artifact)

        for package in self._packages(artifacts):
            init_path = Path(*package.split(".")) / "__init__.py"
            sources.setdefault(init_path, "")

        return sources

    def _packages(self, artifacts: List[Artifact]) -> List[str]:
        packages = [self.config.namespace]
        for artifact in artifacts:
            package = package_for(artifact.namespace, artifact.partition)
            if package not in packages:
                packages.append(package)
        return packages

    def write(self, output_dir: Path, sources, current_hash: str, run_log=None):
        """Write every source file, then the hash marker."""
        run_log = run_log or logger
        output_dir.mkdir(parents=True, exist_ok=True)

        # A stale marker must not survive a run that fails halfway
        marker = output_dir / HASH_MARKER_NAME
        if marker.exists():
            marker.unlink()

        for relative_path, source in sources.items():
            path = output_dir / relative_path
            if path.name == "__init__.py" and path.exists():
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
            run_log.debug("Wrote %s", relative_path)

        marker.write_text(current_hash + "\n", encoding="utf-8")


def generate(config: CodegenConfig) -> GenerationResult:
    """
    Convenience function for a single run with the default generators.

    Args:
        config: Validated or unvalidated configuration

    Returns:
        Outcome of the run
    """
    return CodegenController(config).run()
