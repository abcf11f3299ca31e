from ar_vote_scraper.cli import main

main()
