"""Crowdfund — project lifecycle service for crowdfunding campaigns."""
