from kimai_tray.app import main

if __name__ == "__main__":
    main()
