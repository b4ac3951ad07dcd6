from yalisp.main import main


main()
