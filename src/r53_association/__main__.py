"""Allow ``python -m r53_association``."""

from r53_association.cli import run_entrypoint

if __name__ == "__main__":  # pragma: no cover
    run_entrypoint()
