"""Status Bounty Bot - moves labeled GitHub issues onto a project board."""
