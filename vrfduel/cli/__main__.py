from vrfduel.cli import main

main()
