from telegram_notifications.cli import main

if __name__ == "__main__":
    main()
