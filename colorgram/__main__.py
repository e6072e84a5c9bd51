from colorgram.cli import main

main()
