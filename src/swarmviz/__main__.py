from swarmviz.cli import main

main()
