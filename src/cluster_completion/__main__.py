from cluster_completion.main import run

run()
