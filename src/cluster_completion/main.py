from cluster_completion.presentation.cli import cli


def run():
    """Entry point for the cluster-complete command."""
    cli()


if __name__ == "__main__":
    run()
